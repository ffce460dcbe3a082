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

"""Typed views of a 16-byte vector value.

A vector value is an immutable 16-byte ``bytes`` object. The functions here
read it as lanes of one scalar type (``read_u32_lane``, ``decode_lanes``, ...)
and build one from Python numbers (``pack_lanes``). The byte order defaults
to the machine's, which is how the bytes of a SIMD register reinterpret.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable
from enum import Enum

import numpy as np

__all__ = [
    "VECTOR_WIDTH_BYTES",
    "LaneType",
    "decode_lanes",
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
]

VECTOR_WIDTH_BYTES = 16


class LaneType(Enum):
    """Scalar element types a vector can be split into.

    The value is the NumPy type code of the element.
    """

    U32 = "u4"
    I32 = "i4"
    U16 = "u2"
    I16 = "i2"
    U8 = "u1"
    I8 = "i1"
    F32 = "f4"
    F64 = "f8"

    @property
    def size(self) -> int:
        return np.dtype(self.value).itemsize

    @property
    def lane_count(self) -> int:
        return VECTOR_WIDTH_BYTES // self.size

    @property
    def is_float(self) -> bool:
        return np.dtype(self.value).kind == "f"

    @property
    def short_name(self) -> str:
        return self.name.lower()

    def dtype(self, byteorder: str = "=") -> np.dtype:
        return np.dtype(self.value).newbyteorder(byteorder)

    @classmethod
    def from_name(cls, name: str) -> LaneType:
        try:
            return cls[name.upper()]
        except KeyError:
            valid = ", ".join(t.short_name for t in cls)
            raise ValueError(
                f"unknown lane type {name!r}, expected one of {valid}"
            ) from None


def _check_width(data: bytes) -> None:
    if len(data) != VECTOR_WIDTH_BYTES:
        raise ValueError(
            f"vector value must be {VECTOR_WIDTH_BYTES} bytes, got {len(data)}"
        )


def decode_lanes(
    data: bytes, lane_type: LaneType, byteorder: str = "="
) -> list[int] | list[float]:
    """Return every lane of ``data`` as Python ints or floats."""
    _check_width(data)
    return np.frombuffer(data, dtype=lane_type.dtype(byteorder)).tolist()


def read_lane(
    data: bytes, lane_type: LaneType, index: int, byteorder: str = "="
) -> int | float:
    _check_width(data)
    if not 0 <= index < lane_type.lane_count:
        raise IndexError(
            f"lane {index} out of range for "
            f"{lane_type.lane_count} x {lane_type.short_name}"
        )
    dtype = lane_type.dtype(byteorder)
    return np.frombuffer(data, dtype=dtype, count=1, offset=index * dtype.itemsize)[
        0
    ].item()


def read_u32_lane(data: bytes, index: int, byteorder: str = "=") -> int:
    return read_lane(data, LaneType.U32, index, byteorder)


def read_i32_lane(data: bytes, index: int, byteorder: str = "=") -> int:
    return read_lane(data, LaneType.I32, index, byteorder)


def read_u16_lane(data: bytes, index: int, byteorder: str = "=") -> int:
    return read_lane(data, LaneType.U16, index, byteorder)


def read_i16_lane(data: bytes, index: int, byteorder: str = "=") -> int:
    return read_lane(data, LaneType.I16, index, byteorder)


def read_u8_lane(data: bytes, index: int, byteorder: str = "=") -> int:
    return read_lane(data, LaneType.U8, index, byteorder)


def read_i8_lane(data: bytes, index: int, byteorder: str = "=") -> int:
    return read_lane(data, LaneType.I8, index, byteorder)


def read_f32_lane(data: bytes, index: int, byteorder: str = "=") -> float:
    return read_lane(data, LaneType.F32, index, byteorder)


def read_f64_lane(data: bytes, index: int, byteorder: str = "=") -> float:
    return read_lane(data, LaneType.F64, index, byteorder)


def pack_lanes(
    lane_type: LaneType, values: Iterable[int | float], byteorder: str = "="
) -> bytes:
    """Build a vector value from exactly ``lane_type.lane_count`` numbers.

    Integers must fit the lane type; floats are rounded to the lane precision.
    """
    items = list(values)
    if len(items) != lane_type.lane_count:
        raise ValueError(
            f"{lane_type.short_name} vector needs {lane_type.lane_count} lanes, "
            f"got {len(items)}"
        )
    dtype = lane_type.dtype(byteorder)
    if not lane_type.is_float:
        info = np.iinfo(dtype)
        items = [operator.index(value) for value in items]
        for value in items:
            if not info.min <= value <= info.max:
                raise ValueError(
                    f"{value} does not fit a {lane_type.short_name} lane"
                )
    return np.array(items, dtype=dtype).tobytes()
