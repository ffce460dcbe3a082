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

"""Splits a printf format string into literal text and conversion directives.

Directive grammar::

    %[flags][width][.precision][modifier]conversion

    flags      := any of "-+ #0'"
    width      := digits | "*"
    precision  := "." (digits | "*")?      (a bare "." means precision 0)
    modifier   := registered modifier | hh | h | l | ll | q | L | j | z | Z | t

Registered modifiers are tried first and the longest one matching at the
current position wins; the standard length modifiers are only considered when
no registered modifier matched.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from vecpf.errors import FormatSyntaxError

__all__ = ["STAR", "Directive", "FLAG_CHARS", "parse_format"]

FLAG_CHARS = "-+ #0'"

# Marker for a width or precision supplied through the argument list.
STAR = -2


@dataclass(frozen=True)
class Directive:
    """A single ``%`` directive as written in the format string."""

    text: str
    spec: str
    alt: bool = False
    space: bool = False
    left: bool = False
    showsign: bool = False
    group: bool = False
    zero: bool = False
    width: int | None = None
    prec: int | None = None
    user: int = 0
    length: str = ""

    @property
    def star_width(self) -> bool:
        return self.width == STAR

    @property
    def star_prec(self) -> bool:
        return self.prec == STAR


def _match_registered(fmt: str, pos: int, modifiers: Mapping[str, int]) -> str | None:
    best: str | None = None
    for token in modifiers:
        if fmt.startswith(token, pos) and (best is None or len(token) > len(best)):
            best = token
    return best


def _match_length(fmt: str, pos: int) -> str:
    ch = fmt[pos] if pos < len(fmt) else ""
    if ch in ("h", "l") and fmt.startswith(ch * 2, pos):
        return ch * 2
    if ch in ("h", "l", "q", "L", "j", "z", "Z", "t"):
        return ch
    return ""


def _read_number(fmt: str, pos: int) -> tuple[int | None, int]:
    end = pos
    while end < len(fmt) and fmt[end] in "0123456789":
        end += 1
    if end == pos:
        return None, pos
    return int(fmt[pos:end]), end


def _parse_directive(
    fmt: str, start: int, modifiers: Mapping[str, int]
) -> tuple[Directive, int]:
    pos = start + 1
    flags = set()
    while pos < len(fmt) and fmt[pos] in FLAG_CHARS:
        flags.add(fmt[pos])
        pos += 1

    width: int | None
    if pos < len(fmt) and fmt[pos] == "*":
        width, pos = STAR, pos + 1
    else:
        width, pos = _read_number(fmt, pos)

    prec: int | None = None
    if pos < len(fmt) and fmt[pos] == ".":
        pos += 1
        if pos < len(fmt) and fmt[pos] == "*":
            prec, pos = STAR, pos + 1
        else:
            number, pos = _read_number(fmt, pos)
            prec = 0 if number is None else number

    user = 0
    length = ""
    token = _match_registered(fmt, pos, modifiers)
    if token is not None:
        user = modifiers[token]
        pos += len(token)
    else:
        length = _match_length(fmt, pos)
        pos += len(length)

    if pos >= len(fmt):
        raise FormatSyntaxError("incomplete conversion directive", fmt, start)

    spec = fmt[pos]
    pos += 1
    directive = Directive(
        text=fmt[start:pos],
        spec=spec,
        alt="#" in flags,
        space=" " in flags,
        left="-" in flags,
        showsign="+" in flags,
        group="'" in flags,
        zero="0" in flags,
        width=width,
        prec=prec,
        user=user,
        length=length,
    )
    return directive, pos


def parse_format(
    fmt: str, modifiers: Mapping[str, int] | None = None
) -> list[str | Directive]:
    """Parse ``fmt`` into a list of literal strings and ``Directive`` objects.

    ``%%`` is returned as the literal ``"%"``. Adjacent literals are merged.

    Raises:
        FormatSyntaxError: If a directive is cut off by the end of the string.
    """
    modifiers = modifiers or {}
    items: list[str | Directive] = []
    literal: list[str] = []
    pos = 0
    while pos < len(fmt):
        pct = fmt.find("%", pos)
        if pct < 0:
            literal.append(fmt[pos:])
            break
        literal.append(fmt[pos:pct])
        if fmt.startswith("%%", pct):
            literal.append("%")
            pos = pct + 2
            continue
        directive, pos = _parse_directive(fmt, pct, modifiers)
        if literal:
            text = "".join(literal)
            if text:
                items.append(text)
            literal = []
        items.append(directive)
    text = "".join(literal)
    if text:
        items.append(text)
    return items
