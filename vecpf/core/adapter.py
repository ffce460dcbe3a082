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

"""Argument handling for the vector argument kind.

The runtime asks two things before calling a vector formatter: should this
directive consume a vector argument at all (``probe``), and how is the
caller's object turned into raw bytes (``copy_vector``). Only the modifier
bits are inspected; every supported conversion takes the same 16 bytes.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from vecpf.core.lanes import VECTOR_WIDTH_BYTES
from vecpf.core.modifiers import ModifierRegistry
from vecpf.errors import ArgumentError
from vecpf.printf.info import PrintfInfo
from vecpf.printf.runtime import ArgumentSpec

__all__ = ["VectorArgumentAdapter", "copy_vector"]


def copy_vector(arg: Any) -> bytes:
    """Copy a vector argument into an immutable ``bytes`` object.

    Accepts any bytes-like object or a NumPy array; the array's raw memory is
    copied as is, so a ``(4,) uint32`` array yields its 16 bytes.
    """
    if isinstance(arg, np.ndarray):
        return np.ascontiguousarray(arg).tobytes()
    if isinstance(arg, (bytes, bytearray, memoryview)):
        return bytes(arg)
    raise ArgumentError(
        f"vector argument must be bytes-like or a numpy array, got {type(arg).__name__}"
    )


class VectorArgumentAdapter:
    def __init__(self, registry: ModifierRegistry, kind_id: int):
        self.registry = registry
        self.kind_id = kind_id
        self._spec = ArgumentSpec(kind=kind_id, size=VECTOR_WIDTH_BYTES)

    def probe(self, info: PrintfInfo) -> ArgumentSpec | None:
        """Claim the argument if ``info`` carries any vector modifier bit."""
        if self.registry.matches(info.user):
            return self._spec
        return None
