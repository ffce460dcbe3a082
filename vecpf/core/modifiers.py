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

"""Vector size modifiers and the bits the printf runtime assigns to them.

Tokens (AltiVec PIM, plus ``vv`` for VSX doubles):

    vl, lv   vector of four-byte words
    vh, hv   vector of two-byte halfwords
    v        vector of bytes, or of single-precision floats
    vv       vector of double-precision floats

Alias tokens resolve to one canonical ``VectorModifier`` before any table
lookup, so ``%vld`` and ``%lvd`` are the same request.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from vecpf.errors import RegistrationError
from vecpf.logging_config import get_logger

if TYPE_CHECKING:
    from vecpf.printf.runtime import PrintfRuntime

logger = get_logger(__name__)

__all__ = [
    "MODIFIER_TOKENS",
    "ModifierEntry",
    "ModifierRegistry",
    "VectorModifier",
]


class VectorModifier(Enum):
    """Canonical modifier classes, in dispatch priority order."""

    WORD = "word"
    HALFWORD = "halfword"
    SINGLE = "single"
    DOUBLE = "double"


MODIFIER_TOKENS: tuple[tuple[str, VectorModifier], ...] = (
    ("vl", VectorModifier.WORD),
    ("lv", VectorModifier.WORD),
    ("vh", VectorModifier.HALFWORD),
    ("hv", VectorModifier.HALFWORD),
    ("v", VectorModifier.SINGLE),
    ("vv", VectorModifier.DOUBLE),
)


@dataclass(frozen=True)
class ModifierEntry:
    token: str
    modifier: VectorModifier
    bit: int


class ModifierRegistry:
    """Read-only view of the registered vector modifiers of one runtime."""

    def __init__(self, entries: Iterable[ModifierEntry]):
        self._entries = tuple(entries)
        self._bits = {m: 0 for m in VectorModifier}
        for entry in self._entries:
            self._bits[entry.modifier] |= entry.bit
        self._all_bits = 0
        for bits in self._bits.values():
            self._all_bits |= bits

    @classmethod
    def register(cls, runtime: PrintfRuntime) -> ModifierRegistry:
        """Register every vector modifier token with ``runtime``.

        Either all tokens are registered or, if the runtime refuses one, the
        tokens registered so far are released again before the error is
        re-raised.
        """
        entries: list[ModifierEntry] = []
        try:
            for token, modifier in MODIFIER_TOKENS:
                bit = runtime.register_modifier(token)
                entries.append(ModifierEntry(token, modifier, bit))
                logger.debug(
                    "Registered vector modifier %r (%s) as bit %#x",
                    token,
                    modifier.value,
                    bit,
                )
        except RegistrationError:
            cls(entries).unregister(runtime)
            raise
        return cls(entries)

    def unregister(self, runtime: PrintfRuntime) -> None:
        """Release every token of this registry from ``runtime``."""
        for entry in reversed(self._entries):
            runtime.unregister_modifier(entry.token)

    @property
    def entries(self) -> tuple[ModifierEntry, ...]:
        return self._entries

    @property
    def all_bits(self) -> int:
        return self._all_bits

    def bits_for(self, modifier: VectorModifier) -> int:
        """Union of the bits of every token that maps to ``modifier``."""
        return self._bits[modifier]

    def matches(self, user_bits: int) -> bool:
        """True if any registered vector modifier is present in ``user_bits``."""
        return bool(user_bits & self._all_bits)

    def resolve(self, user_bits: int) -> list[VectorModifier]:
        """Canonical modifiers present in ``user_bits``, highest priority first."""
        return [m for m in VectorModifier if user_bits & self._bits[m]]

    def entry_for(self, token: str) -> ModifierEntry:
        for entry in self._entries:
            if entry.token == token:
                return entry
        raise KeyError(f"vector modifier {token!r} not registered")

    def __repr__(self) -> str:
        tokens = ", ".join(f"{e.token}={e.bit:#x}" for e in self._entries)
        return f"ModifierRegistry({tokens})"
