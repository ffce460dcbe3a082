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

"""Parsed formatting request handed to every conversion callback."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["LENGTH_MODIFIERS", "PrintfInfo"]

# Standard C length modifiers and the integer width (in bits) they select.
LENGTH_MODIFIERS: dict[str, int] = {
    "hh": 8,
    "h": 16,
    "": 32,
    "l": 64,
    "ll": 64,
    "q": 64,
    "L": 64,
    "j": 64,
    "z": 64,
    "Z": 64,
    "t": 64,
}


@dataclass(frozen=True)
class PrintfInfo:
    """One conversion request, after ``*`` arguments have been resolved.

    ``width`` is never negative: a negative ``*`` width has already been turned
    into ``left=True``. ``prec`` is ``-1`` when no precision was given (or a
    negative ``*`` precision was supplied). ``user`` carries the bits of any
    registered modifier that matched, ``length`` the standard length modifier.
    """

    spec: str
    alt: bool = False
    space: bool = False
    left: bool = False
    showsign: bool = False
    group: bool = False
    pad: str = " "
    width: int = 0
    prec: int = -1
    user: int = 0
    length: str = ""

    def __post_init__(self) -> None:
        if len(self.spec) != 1:
            raise ValueError(f"spec must be a single character, got {self.spec!r}")
        if self.pad not in (" ", "0"):
            raise ValueError(f"pad must be ' ' or '0', got {self.pad!r}")
        if self.width < 0:
            raise ValueError("width must be non-negative")
        if self.length not in LENGTH_MODIFIERS:
            raise ValueError(f"unknown length modifier {self.length!r}")

    @property
    def has_precision(self) -> bool:
        return self.prec >= 0

    @property
    def int_bits(self) -> int:
        """Width an integer argument is truncated to before conversion."""
        return LENGTH_MODIFIERS[self.length]
