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

import numpy as np
import pytest

from vecpf.core.adapter import VectorArgumentAdapter, copy_vector
from vecpf.core.lanes import LaneType, pack_lanes
from vecpf.core.modifiers import ModifierRegistry
from vecpf.errors import ArgumentError
from vecpf.printf.info import PrintfInfo
from vecpf.printf.runtime import ArgumentSpec


class TestCopyVector:
    def test_bytes_like(self):
        raw = bytes(range(16))
        assert copy_vector(raw) == raw
        assert copy_vector(bytearray(raw)) == raw
        assert copy_vector(memoryview(raw)) == raw
        assert type(copy_vector(bytearray(raw))) is bytes

    def test_numpy_arrays(self):
        arr = np.array([1, 2, 3, 4], dtype=np.int32)
        assert copy_vector(arr) == arr.tobytes()
        # Non-contiguous views are copied in logical order
        wide = np.arange(8, dtype=np.uint32)
        assert copy_vector(wide[::2]) == np.array([0, 2, 4, 6], np.uint32).tobytes()

    def test_copy_is_detached(self):
        buf = bytearray(16)
        raw = copy_vector(buf)
        buf[0] = 0xFF
        assert raw[0] == 0

    @pytest.mark.parametrize("value", [[1, 2, 3, 4], 7, "this space is fo", None])
    def test_rejects_other_types(self, value):
        with pytest.raises(ArgumentError, match="bytes-like or a numpy array"):
            copy_vector(value)


class TestVectorArgumentAdapter:
    def test_probe(self, runtime):
        registry = ModifierRegistry.register(runtime)
        adapter = VectorArgumentAdapter(registry, kind_id=11)

        for entry in registry.entries:
            spec = adapter.probe(PrintfInfo("d", user=entry.bit))
            assert spec == ArgumentSpec(kind=11, size=16)
        assert adapter.probe(PrintfInfo("d")) is None
        # Bits owned by some other extension
        assert adapter.probe(PrintfInfo("d", user=1 << 12)) is None

    def test_wrong_width_through_runtime(self, handle):
        with pytest.raises(ArgumentError, match="expects 16 bytes, got 8"):
            handle.sprintf("%vld", b"\x00" * 8)
        with pytest.raises(ArgumentError, match="expects 16 bytes, got 32"):
            handle.sprintf("%vvf", np.zeros(4))

    def test_non_vector_arguments_are_untouched(self, handle):
        raw = pack_lanes(LaneType.U8, range(16))
        assert handle.sprintf("%d %vd", 7, raw).startswith("7 0 1 2")
