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

"""Dispatch tables: (canonical modifier, conversion) -> lane layout.

Each entry says how wide a lane is, how its bytes are interpreted, and which
scalar conversion (``suffix``) renders it. Integer conversions narrow through
the standard ``h``/``hh`` length modifiers so that the scalar formatter sees
exactly the lane's width and signedness.

There is one integer-family and one floating-family table. ``F`` is accepted
as a floating conversion but has no rows, so ``%vF`` is always declined.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from vecpf.core.lanes import VECTOR_WIDTH_BYTES, LaneType
from vecpf.core.modifiers import ModifierRegistry, VectorModifier

__all__ = [
    "FLOAT_CONVERSIONS",
    "FLOAT_TABLE",
    "INTEGER_CONVERSIONS",
    "INTEGER_TABLE",
    "DispatchEntry",
    "DispatchTable",
    "iter_entries",
    "lookup",
    "table_for",
]

INTEGER_CONVERSIONS = "diouxXc"
FLOAT_CONVERSIONS = "fFeEgGaA"


@dataclass(frozen=True)
class DispatchEntry:
    conversion: str
    modifier: VectorModifier
    element_size: int
    lane_type: LaneType
    suffix: str

    def __post_init__(self) -> None:
        if VECTOR_WIDTH_BYTES % self.element_size != 0:
            raise ValueError(
                f"element size {self.element_size} does not divide "
                f"{VECTOR_WIDTH_BYTES}"
            )
        if self.lane_type.size != self.element_size:
            raise ValueError(
                f"{self.lane_type.short_name} lanes are {self.lane_type.size} bytes, "
                f"not {self.element_size}"
            )

    @property
    def lane_count(self) -> int:
        return VECTOR_WIDTH_BYTES // self.element_size


DispatchTable = Mapping[tuple[VectorModifier, str], DispatchEntry]

_W = VectorModifier.WORD
_H = VectorModifier.HALFWORD
_S = VectorModifier.SINGLE
_D = VectorModifier.DOUBLE


def _table(*entries: DispatchEntry) -> DispatchTable:
    table: dict[tuple[VectorModifier, str], DispatchEntry] = {}
    for entry in entries:
        key = (entry.modifier, entry.conversion)
        if key in table:
            raise ValueError(f"duplicate dispatch entry for {key}")
        table[key] = entry
    return MappingProxyType(table)


# fmt: off
INTEGER_TABLE: DispatchTable = _table(
    DispatchEntry("d", _W, 4, LaneType.I32, "d"),
    DispatchEntry("d", _H, 2, LaneType.I16, "hd"),
    DispatchEntry("d", _S, 1, LaneType.I8,  "hhd"),

    DispatchEntry("i", _W, 4, LaneType.I32, "i"),
    DispatchEntry("i", _H, 2, LaneType.I16, "hi"),
    DispatchEntry("i", _S, 1, LaneType.I8,  "hhi"),

    DispatchEntry("o", _W, 4, LaneType.U32, "o"),
    DispatchEntry("o", _H, 2, LaneType.U16, "ho"),
    DispatchEntry("o", _S, 1, LaneType.U8,  "hho"),

    DispatchEntry("u", _W, 4, LaneType.U32, "u"),
    DispatchEntry("u", _H, 2, LaneType.U16, "hu"),
    DispatchEntry("u", _S, 1, LaneType.U8,  "hhu"),

    DispatchEntry("x", _W, 4, LaneType.U32, "x"),
    DispatchEntry("x", _H, 2, LaneType.U16, "hx"),
    DispatchEntry("x", _S, 1, LaneType.U8,  "hhx"),

    DispatchEntry("X", _W, 4, LaneType.U32, "X"),
    DispatchEntry("X", _H, 2, LaneType.U16, "hX"),
    DispatchEntry("X", _S, 1, LaneType.U8,  "hhX"),

    DispatchEntry("c", _S, 1, LaneType.U8,  "c"),
)

FLOAT_TABLE: DispatchTable = _table(
    DispatchEntry("f", _S, 4, LaneType.F32, "f"),
    DispatchEntry("e", _S, 4, LaneType.F32, "e"),
    DispatchEntry("E", _S, 4, LaneType.F32, "E"),
    DispatchEntry("g", _S, 4, LaneType.F32, "g"),
    DispatchEntry("G", _S, 4, LaneType.F32, "G"),
    DispatchEntry("a", _S, 4, LaneType.F32, "a"),
    DispatchEntry("A", _S, 4, LaneType.F32, "A"),

    DispatchEntry("f", _D, 8, LaneType.F64, "f"),
    DispatchEntry("e", _D, 8, LaneType.F64, "e"),
    DispatchEntry("E", _D, 8, LaneType.F64, "E"),
    DispatchEntry("g", _D, 8, LaneType.F64, "g"),
    DispatchEntry("G", _D, 8, LaneType.F64, "G"),
    DispatchEntry("a", _D, 8, LaneType.F64, "a"),
    DispatchEntry("A", _D, 8, LaneType.F64, "A"),
)
# fmt: on


def table_for(conversion: str) -> DispatchTable | None:
    """The table family responsible for ``conversion``, if any."""
    if conversion in INTEGER_CONVERSIONS:
        return INTEGER_TABLE
    if conversion in FLOAT_CONVERSIONS:
        return FLOAT_TABLE
    return None


def lookup(
    table: DispatchTable,
    conversion: str,
    user_bits: int,
    registry: ModifierRegistry,
) -> DispatchEntry | None:
    """Resolve a request against ``table``.

    Every canonical modifier present in ``user_bits`` is tried in priority
    order (word, halfword, single, double); the first with a row for
    ``conversion`` wins. ``None`` means the request is not a vector request
    this table handles.
    """
    for modifier in registry.resolve(user_bits):
        entry = table.get((modifier, conversion))
        if entry is not None:
            return entry
    return None


def iter_entries() -> list[DispatchEntry]:
    """All entries of both tables, integer family first."""
    return [*INTEGER_TABLE.values(), *FLOAT_TABLE.values()]
