# Copyright 2025 Ant Group Co., Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Vector conversion engine: modifiers, dispatch, synthesis and lane output."""

from vecpf.core.adapter import VectorArgumentAdapter, copy_vector
from vecpf.core.dispatch import (
    FLOAT_CONVERSIONS,
    FLOAT_TABLE,
    INTEGER_CONVERSIONS,
    INTEGER_TABLE,
    DispatchEntry,
    iter_entries,
    lookup,
    table_for,
)
from vecpf.core.formatter import LANE_SEPARATOR, VectorFormatter
from vecpf.core.install import VectorPrintfHandle, install, installed_handle
from vecpf.core.lanes import (
    VECTOR_WIDTH_BYTES,
    LaneType,
    decode_lanes,
    pack_lanes,
    read_f32_lane,
    read_f64_lane,
    read_i8_lane,
    read_i16_lane,
    read_i32_lane,
    read_lane,
    read_u8_lane,
    read_u16_lane,
    read_u32_lane,
)
from vecpf.core.modifiers import (
    MODIFIER_TOKENS,
    ModifierEntry,
    ModifierRegistry,
    VectorModifier,
)
from vecpf.core.synth import SYNTH_FORMAT_MAX_LEN, synthesize_format

__all__ = [
    "FLOAT_CONVERSIONS",
    "FLOAT_TABLE",
    "INTEGER_CONVERSIONS",
    "INTEGER_TABLE",
    "LANE_SEPARATOR",
    "MODIFIER_TOKENS",
    "SYNTH_FORMAT_MAX_LEN",
    "VECTOR_WIDTH_BYTES",
    "DispatchEntry",
    "LaneType",
    "ModifierEntry",
    "ModifierRegistry",
    "VectorArgumentAdapter",
    "VectorFormatter",
    "VectorModifier",
    "VectorPrintfHandle",
    "copy_vector",
    "decode_lanes",
    "install",
    "installed_handle",
    "iter_entries",
    "lookup",
    "pack_lanes",
    "read_f32_lane",
    "read_f64_lane",
    "read_i8_lane",
    "read_i16_lane",
    "read_i32_lane",
    "read_lane",
    "read_u8_lane",
    "read_u16_lane",
    "read_u32_lane",
    "synthesize_format",
    "table_for",
]
