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

"""A printf runtime with an extension protocol.

``PrintfRuntime`` renders C-style format strings and lets libraries plug new
behaviour into it through three registration calls:

* ``register_modifier(token) -> bit``: a new size-modifier token. When it
  appears in a directive, its bit is set in ``PrintfInfo.user``.
* ``register_argument_kind(copy, size) -> kind_id``: a new argument shape.
  ``copy`` turns the caller's Python object into exactly ``size`` bytes.
* ``register_specifier(spec, formatter, probe)``: a handler for a conversion
  character. ``probe(info)`` returns an ``ArgumentSpec`` if the handler wants
  the request, or ``None`` to leave it to the default handling;
  ``formatter(stream, info, raw)`` then writes the output and returns a
  ``FormatResult``.

A ``Declined`` result makes the runtime render the directive with its default
handling; a ``Failed`` result re-raises the underlying exception.
"""

from __future__ import annotations

import io
import operator
import sys
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from vecpf.errors import ArgumentError, FormatSyntaxError, RegistrationError
from vecpf.logging_config import get_logger
from vecpf.printf.info import PrintfInfo
from vecpf.printf.parser import FLAG_CHARS, Directive, parse_format
from vecpf.printf.result import Declined, Failed, FormatResult, Written
from vecpf.printf.scalar import BUILTIN_CONVERSIONS, format_builtin

logger = get_logger(__name__)

__all__ = [
    "ArgumentKind",
    "ArgumentSpec",
    "PrintfRuntime",
    "SpecifierHandler",
    "TextSink",
]

# PrintfInfo.user mirrors glibc's 16-bit modifier field.
MAX_MODIFIERS = 16

# Kind ids below this value are reserved for the runtime's own argument types.
FIRST_USER_KIND = 8


class TextSink(Protocol):
    def write(self, s: str, /) -> int | None: ...


@dataclass(frozen=True)
class ArgumentSpec:
    """What a probe asks the runtime to pull from the argument list."""

    kind: int
    size: int


@dataclass(frozen=True)
class ArgumentKind:
    kind_id: int
    copy: Callable[[Any], bytes]
    size: int


ProbeFn = Callable[[PrintfInfo], ArgumentSpec | None]
FormatterFn = Callable[[TextSink, PrintfInfo, bytes], FormatResult]


@dataclass(frozen=True)
class SpecifierHandler:
    spec: str
    formatter: FormatterFn
    probe: ProbeFn


class PrintfRuntime:
    """C-compatible printf family with registrable extensions."""

    def __init__(self, name: str = "printf"):
        self.name = name
        self._lock = threading.Lock()
        self._modifiers: dict[str, int] = {}
        self._kinds: dict[int, ArgumentKind] = {}
        self._next_kind = FIRST_USER_KIND
        self._specifiers: dict[str, SpecifierHandler] = {}
        # Per-extension state, keyed by extension name.
        self.extensions: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"PrintfRuntime(name={self.name!r})"

    # ------------------------------------------------------------------
    # Registration protocol
    # ------------------------------------------------------------------
    def register_modifier(self, token: str) -> int:
        """Register a size-modifier token and return the bit assigned to it."""
        if not token or not token.isalpha():
            raise RegistrationError(f"modifier token must be alphabetic, got {token!r}")
        with self._lock:
            if token in self._modifiers:
                raise RegistrationError(f"modifier {token!r} is already registered")
            if len(self._modifiers) >= MAX_MODIFIERS:
                raise RegistrationError(
                    f"cannot register {token!r}: "
                    f"all {MAX_MODIFIERS} modifier bits in use"
                )
            used = 0
            for b in self._modifiers.values():
                used |= b
            # Lowest free bit; released bits are reused.
            bit = ~used & (used + 1)
            self._modifiers[token] = bit
        logger.debug("%s: modifier %r -> bit %#x", self.name, token, bit)
        return bit

    def unregister_modifier(self, token: str) -> None:
        """Release ``token`` and its bit."""
        with self._lock:
            try:
                bit = self._modifiers.pop(token)
            except KeyError:
                raise RegistrationError(
                    f"modifier {token!r} is not registered"
                ) from None
        logger.debug("%s: released modifier %r (bit %#x)", self.name, token, bit)

    def register_argument_kind(self, copy: Callable[[Any], bytes], size: int) -> int:
        """Register a new argument shape and return its kind id."""
        if size <= 0:
            raise RegistrationError(f"argument size must be positive, got {size}")
        with self._lock:
            kind_id = self._next_kind
            self._next_kind += 1
            self._kinds[kind_id] = ArgumentKind(kind_id=kind_id, copy=copy, size=size)
        logger.debug("%s: argument kind %d (%d bytes)", self.name, kind_id, size)
        return kind_id

    def unregister_argument_kind(self, kind_id: int) -> None:
        """Drop an argument kind. Its id is never reused."""
        with self._lock:
            if self._kinds.pop(kind_id, None) is None:
                raise RegistrationError(f"argument kind {kind_id} is not registered")
        logger.debug("%s: released argument kind %d", self.name, kind_id)

    def register_specifier(
        self, spec: str, formatter: FormatterFn, probe: ProbeFn
    ) -> None:
        """Install a handler for conversion character ``spec``.

        A later registration for the same character replaces the earlier one.
        """
        if len(spec) != 1 or spec == "%" or spec in FLAG_CHARS or spec.isdigit():
            raise RegistrationError(f"invalid conversion character {spec!r}")
        with self._lock:
            previous = self._specifiers.get(spec)
            self._specifiers[spec] = SpecifierHandler(spec, formatter, probe)
        if previous is not None:
            logger.debug("%s: replaced handler for %%%s", self.name, spec)

    @property
    def modifiers(self) -> dict[str, int]:
        return dict(self._modifiers)

    def specifier(self, spec: str) -> SpecifierHandler | None:
        return self._specifiers.get(spec)

    def argument_kind(self, kind_id: int) -> ArgumentKind:
        try:
            return self._kinds[kind_id]
        except KeyError:
            raise ArgumentError(f"unknown argument kind {kind_id}") from None

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------
    def sprintf(self, fmt: str, *args: Any) -> str:
        buf = io.StringIO()
        self.vfprintf(buf, fmt, args)
        return buf.getvalue()

    def printf(self, fmt: str, *args: Any) -> int:
        return self.vfprintf(sys.stdout, fmt, args)

    def fprintf(self, stream: TextSink, fmt: str, *args: Any) -> int:
        return self.vfprintf(stream, fmt, args)

    def vfprintf(self, stream: TextSink, fmt: str, args: Sequence[Any]) -> int:
        """Write ``fmt`` rendered with ``args`` to ``stream``.

        Returns:
            The number of characters written.

        Raises:
            FormatSyntaxError: On a malformed or unknown directive.
            ArgumentError: On missing, surplus or ill-typed arguments.
            OSError: Propagated unchanged from ``stream.write``.
        """
        items = parse_format(fmt, self._modifiers)
        arg_iter = _ArgCursor(args)
        written = 0
        for item in items:
            if isinstance(item, str):
                stream.write(item)
                written += len(item)
            else:
                written += self._render(stream, fmt, item, arg_iter)
        if arg_iter.remaining:
            raise ArgumentError(
                f"{arg_iter.remaining} unused argument(s) for format {fmt!r}"
            )
        return written

    def _render(
        self, stream: TextSink, fmt: str, directive: Directive, args: _ArgCursor
    ) -> int:
        handler = self._specifiers.get(directive.spec)
        if handler is None and directive.spec not in BUILTIN_CONVERSIONS:
            raise FormatSyntaxError(
                f"unknown conversion {directive.text!r}", fmt, fmt.find(directive.text)
            )

        info = self._resolve_info(directive, args)
        value = args.take(directive.text)

        if handler is not None:
            arg_spec = handler.probe(info)
            if arg_spec is not None:
                raw = self._copy_argument(arg_spec, value, directive)
                result = handler.formatter(stream, info, raw)
                if isinstance(result, Written):
                    return result.count
                if isinstance(result, Failed):
                    raise result.cause
                if not isinstance(result, Declined):
                    raise TypeError(
                        f"handler for %{directive.spec} returned {result!r}"
                    )
                logger.debug(
                    "%s: %s declined, using default", self.name, directive.text
                )

        text = format_builtin(info, value)
        stream.write(text)
        return len(text)

    def _resolve_info(self, directive: Directive, args: _ArgCursor) -> PrintfInfo:
        left = directive.left
        width = 0
        if directive.star_width:
            width = args.take_int(directive.text)
            if width < 0:
                left, width = True, -width
        elif directive.width is not None:
            width = directive.width

        prec = -1
        if directive.star_prec:
            prec = args.take_int(directive.text)
            prec = max(prec, -1)
        elif directive.prec is not None:
            prec = directive.prec

        return PrintfInfo(
            spec=directive.spec,
            alt=directive.alt,
            space=directive.space,
            left=left,
            showsign=directive.showsign,
            group=directive.group,
            pad="0" if directive.zero else " ",
            width=width,
            prec=prec,
            user=directive.user,
            length=directive.length,
        )

    def _copy_argument(
        self, arg_spec: ArgumentSpec, value: Any, directive: Directive
    ) -> bytes:
        kind = self.argument_kind(arg_spec.kind)
        raw = kind.copy(value)
        if len(raw) != arg_spec.size:
            raise ArgumentError(
                f"{directive.text!r} expects {arg_spec.size} bytes, got {len(raw)}"
            )
        return raw


class _ArgCursor:
    def __init__(self, args: Sequence[Any]):
        self._args = args
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._args) - self._pos

    def take(self, directive: str) -> Any:
        if self._pos >= len(self._args):
            raise ArgumentError(f"missing argument for {directive!r}")
        value = self._args[self._pos]
        self._pos += 1
        return value

    def take_int(self, directive: str) -> int:
        value = self.take(directive)
        if isinstance(value, bool):
            raise ArgumentError(f"'*' in {directive!r} needs an int, got bool")
        try:
            return operator.index(value)
        except TypeError:
            raise ArgumentError(
                f"'*' in {directive!r} needs an int, got {type(value).__name__}"
            ) from None
