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

"""C printf semantics for the built-in scalar conversions.

Each renderer formats a single argument according to a ``PrintfInfo`` and
returns the finished field, padding included. Behaviour follows C99 as
implemented by glibc for the supported subset:

* integers are truncated to the width selected by the length modifier
  (``int`` when there is none) and reinterpreted as signed for ``d``/``i``;
* ``+`` and space only apply to signed conversions;
* ``0`` padding is ignored with ``-``, for integers with an explicit
  precision, and for ``inf``/``nan``;
* ``'`` groups decimal digits with the locale's ``LC_NUMERIC`` rules;
* ``%a`` prints the shortest exact hexadecimal mantissa unless a precision
  is given, in which case it is rounded half-to-even.
"""

from __future__ import annotations

import locale
import math
import operator
from typing import Any

from vecpf.errors import ArgumentError, PrintfError
from vecpf.printf.info import PrintfInfo

__all__ = [
    "BUILTIN_CONVERSIONS",
    "FLOAT_CONVERSIONS",
    "INTEGER_CONVERSIONS",
    "format_builtin",
    "format_char",
    "format_float",
    "format_integer",
    "format_string",
    "group_digits",
    "wrap_integer",
]

INTEGER_CONVERSIONS = "diouxX"
FLOAT_CONVERSIONS = "fFeEgGaA"
BUILTIN_CONVERSIONS = INTEGER_CONVERSIONS + FLOAT_CONVERSIONS + "cs"

_DIGITS = "0123456789"


def wrap_integer(value: int, bits: int, signed: bool) -> int:
    """Truncate ``value`` to ``bits`` the way a C cast would."""
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def group_digits(digits: str) -> str:
    """Insert the locale's thousands separator into a run of digits."""
    conv = locale.localeconv()
    sep = conv["thousands_sep"]
    grouping = conv["grouping"]
    if not sep or not grouping:
        return digits

    groups: list[str] = []
    end = len(digits)
    size = 0
    idx = 0
    while end > 0:
        if idx < len(grouping):
            step = grouping[idx]
            if step == locale.CHAR_MAX:
                break
            if step != 0:
                size = step
                idx += 1
            else:
                # 0 repeats the previous group size for the rest of the number
                idx = len(grouping)
        if size <= 0 or end <= size:
            break
        groups.append(digits[end - size : end])
        end -= size
    return sep.join([digits[:end], *reversed(groups)])


def _pad(info: PrintfInfo, prefix: str, body: str, zero_ok: bool) -> str:
    fill = info.width - len(prefix) - len(body)
    if fill <= 0:
        return prefix + body
    if info.left:
        return prefix + body + " " * fill
    if zero_ok and info.pad == "0":
        return prefix + "0" * fill + body
    return " " * fill + prefix + body


def _as_int(value: Any) -> int:
    try:
        return operator.index(value)
    except TypeError as e:
        raise ArgumentError(
            f"expected an integer argument, got {type(value).__name__}"
        ) from e


def _as_float(value: Any) -> float:
    if isinstance(value, (str, bytes, bytearray)):
        raise ArgumentError(f"expected a real number, got {type(value).__name__}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ArgumentError(
            f"expected a real number, got {type(value).__name__}"
        ) from e


def format_integer(info: PrintfInfo, value: Any) -> str:
    conv = info.spec
    signed = conv in "di"
    number = wrap_integer(_as_int(value), info.int_bits, signed)
    negative = number < 0
    magnitude = -number if negative else number

    if info.prec == 0 and magnitude == 0:
        digits = ""
    elif conv == "o":
        digits = format(magnitude, "o")
    elif conv in "xX":
        digits = format(magnitude, conv)
    else:
        digits = str(magnitude)

    if info.group and conv in "diu" and digits:
        digits = group_digits(digits)
    if info.has_precision and len(digits) < info.prec:
        digits = digits.rjust(info.prec, "0")

    prefix = ""
    if info.alt:
        if conv == "o" and not digits.startswith("0"):
            digits = "0" + digits
        elif conv in "xX" and magnitude != 0:
            prefix = "0" + conv

    if negative:
        sign = "-"
    elif signed and info.showsign:
        sign = "+"
    elif signed and info.space:
        sign = " "
    else:
        sign = ""
    return _pad(info, sign + prefix, digits, zero_ok=not info.has_precision)


def _hex_float(magnitude: float, prec: int, alt: bool) -> str:
    # float.hex() always yields 13 fraction digits, e.g. '0x1.8000000000000p+1'
    mantissa, _, exp_text = magnitude.hex()[2:].partition("p")
    lead, _, frac = mantissa.partition(".")
    exponent = int(exp_text)

    if prec < 0:
        frac = frac.rstrip("0")
    elif prec < len(frac):
        drop = 16 ** (len(frac) - prec)
        quotient, remainder = divmod(int(lead + frac, 16), drop)
        half = drop // 2
        if remainder > half or (remainder == half and quotient & 1):
            quotient += 1
        lead_value, frac_value = divmod(quotient, 16**prec)
        lead = format(lead_value, "x")
        frac = format(frac_value, "x").zfill(prec) if prec else ""
    else:
        frac = frac.ljust(prec, "0")

    point = "." + frac if frac or alt else ""
    exp_sign = "-" if exponent < 0 else "+"
    return f"0x{lead}{point}p{exp_sign}{abs(exponent)}"


def _group_leading(body: str) -> str:
    end = 0
    while end < len(body) and body[end] in _DIGITS:
        end += 1
    return group_digits(body[:end]) + body[end:]


def format_float(info: PrintfInfo, value: Any) -> str:
    conv = info.spec
    number = _as_float(value)
    negative = math.copysign(1.0, number) < 0.0
    magnitude = abs(number)
    finite = math.isfinite(number)

    prefix = ""
    if not finite:
        body = "nan" if math.isnan(number) else "inf"
    elif conv in "aA":
        body = _hex_float(magnitude, info.prec, info.alt)
        prefix, body = body[:2], body[2:]
    else:
        prec = info.prec if info.has_precision else 6
        pyfmt = "%" + ("#" if info.alt else "") + "." + str(prec) + conv.lower()
        body = pyfmt % magnitude
        if info.group and conv in "fFgG":
            body = _group_leading(body)
    if conv.isupper():
        prefix, body = prefix.upper(), body.upper()

    if negative:
        sign = "-"
    elif info.showsign:
        sign = "+"
    elif info.space:
        sign = " "
    else:
        sign = ""
    return _pad(info, sign + prefix, body, zero_ok=finite)


def format_char(info: PrintfInfo, value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ArgumentError(f"%c expects a single character, got {value!r}")
        ch = value
    else:
        ch = chr(_as_int(value) & 0xFF)
    return _pad(info, "", ch, zero_ok=False)


def format_string(info: PrintfInfo, value: Any) -> str:
    if value is None:
        text = "(null)"
    elif isinstance(value, str):
        text = value
    elif isinstance(value, (bytes, bytearray)):
        text = bytes(value).decode("latin-1")
    else:
        raise ArgumentError(f"%s expects a string, got {type(value).__name__}")
    if info.has_precision:
        text = text[: info.prec]
    return _pad(info, "", text, zero_ok=False)


def format_builtin(info: PrintfInfo, value: Any) -> str:
    """Render ``value`` with the runtime's default handling of ``info.spec``."""
    spec = info.spec
    if spec in INTEGER_CONVERSIONS:
        return format_integer(info, value)
    if spec in FLOAT_CONVERSIONS:
        return format_float(info, value)
    if spec == "c":
        return format_char(info, value)
    if spec == "s":
        return format_string(info, value)
    raise PrintfError(f"no default handling for conversion %{spec}")
