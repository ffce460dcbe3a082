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

"""Tagged results returned by conversion callbacks.

A callback either wrote its output (``Written``), declined the request so the
runtime falls back to its default rendering (``Declined``), or hit a hard
error while writing (``Failed``). The runtime re-raises ``Failed.cause``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

__all__ = ["DECLINED", "Declined", "Failed", "FormatResult", "Written"]


@dataclass(frozen=True)
class Written:
    count: int


@dataclass(frozen=True)
class Declined:
    pass


@dataclass(frozen=True)
class Failed:
    cause: BaseException


FormatResult: TypeAlias = Written | Declined | Failed

DECLINED = Declined()
