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

"""Builds the scalar format string shared by every lane of a vector request."""

from __future__ import annotations

from vecpf.printf.info import PrintfInfo

__all__ = ["MAX_SUFFIX_LEN", "SYNTH_FORMAT_MAX_LEN", "synthesize_format"]

MAX_SUFFIX_LEN = 3

# '%' + five flags + '0' + '*.*' + suffix
SYNTH_FORMAT_MAX_LEN = 1 + 5 + 1 + 3 + MAX_SUFFIX_LEN


def synthesize_format(info: PrintfInfo, suffix: str) -> str:
    """Rebuild a scalar directive from the request's flags and ``suffix``.

    Flags are emitted in the fixed order ``# -+'``. The ``0`` flag is only kept
    when the request is right-justified. Width and precision are always the
    ``*.*`` placeholders; the caller passes ``info.width`` and ``info.prec``
    with each lane so every lane gets the same field.

    >>> synthesize_format(PrintfInfo("d", showsign=True, pad="0"), "hd")
    '%+0*.*hd'
    """
    if not 0 < len(suffix) <= MAX_SUFFIX_LEN:
        raise ValueError(
            f"lane suffix must be 1-{MAX_SUFFIX_LEN} characters: {suffix!r}"
        )

    parts = ["%"]
    if info.alt:
        parts.append("#")
    if info.space:
        parts.append(" ")
    if info.left:
        parts.append("-")
    if info.showsign:
        parts.append("+")
    if info.group:
        parts.append("'")
    if not info.left and info.pad == "0":
        parts.append("0")
    parts.append("*.*")
    parts.append(suffix)
    return "".join(parts)
