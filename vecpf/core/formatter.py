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

"""Renders a vector value lane by lane through the scalar printf conversions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vecpf.core.dispatch import FLOAT_TABLE, INTEGER_TABLE, DispatchTable, lookup
from vecpf.core.lanes import decode_lanes
from vecpf.core.synth import synthesize_format
from vecpf.errors import PrintfError
from vecpf.logging_config import get_logger
from vecpf.printf.result import DECLINED, Failed, FormatResult, Written

if TYPE_CHECKING:
    from vecpf.core.modifiers import ModifierRegistry
    from vecpf.printf.info import PrintfInfo
    from vecpf.printf.runtime import PrintfRuntime, TextSink

logger = get_logger(__name__)

__all__ = ["LANE_SEPARATOR", "VectorFormatter"]

LANE_SEPARATOR = " "


class VectorFormatter:
    """Conversion callbacks for vector requests.

    ``format_integer`` serves ``d i o u x X c`` and ``format_float`` serves
    ``f F e E g G a A``. Both resolve the request against their table, build
    one scalar directive, and call ``runtime.fprintf`` once per lane.
    """

    def __init__(
        self,
        runtime: PrintfRuntime,
        registry: ModifierRegistry,
        byteorder: str = "=",
    ):
        self.runtime = runtime
        self.registry = registry
        self.byteorder = byteorder

    def format_integer(
        self, stream: TextSink, info: PrintfInfo, raw: bytes
    ) -> FormatResult:
        return self._format(INTEGER_TABLE, stream, info, raw)

    def format_float(
        self, stream: TextSink, info: PrintfInfo, raw: bytes
    ) -> FormatResult:
        return self._format(FLOAT_TABLE, stream, info, raw)

    def _format(
        self, table: DispatchTable, stream: TextSink, info: PrintfInfo, raw: bytes
    ) -> FormatResult:
        entry = lookup(table, info.spec, info.user, self.registry)
        if entry is None:
            logger.debug(
                "No vector layout for %%%s with modifier bits %#x", info.spec, info.user
            )
            return DECLINED

        fmt = synthesize_format(info, entry.suffix)
        lanes = decode_lanes(raw, entry.lane_type, self.byteorder)
        # Character vectors print as one contiguous string.
        separator = "" if entry.suffix == "c" else LANE_SEPARATOR

        written = 0
        last = len(lanes) - 1
        try:
            for i, lane in enumerate(lanes):
                written += self.runtime.fprintf(
                    stream, fmt, info.width, info.prec, lane
                )
                if separator and i < last:
                    stream.write(separator)
                    written += len(separator)
        except (OSError, PrintfError) as e:
            logger.debug(
                "Vector %%%s aborted after %d chars: %s", info.spec, written, e
            )
            return Failed(e)
        return Written(written)
