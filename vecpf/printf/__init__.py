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

"""C-style printf runtime with a specifier/modifier extension protocol."""

from vecpf.printf.info import LENGTH_MODIFIERS, PrintfInfo
from vecpf.printf.parser import Directive, parse_format
from vecpf.printf.result import DECLINED, Declined, Failed, FormatResult, Written
from vecpf.printf.runtime import (
    ArgumentKind,
    ArgumentSpec,
    PrintfRuntime,
    SpecifierHandler,
    TextSink,
)
from vecpf.printf.scalar import BUILTIN_CONVERSIONS, format_builtin

__all__ = [
    "BUILTIN_CONVERSIONS",
    "DECLINED",
    "LENGTH_MODIFIERS",
    "ArgumentKind",
    "ArgumentSpec",
    "Declined",
    "Directive",
    "Failed",
    "FormatResult",
    "PrintfInfo",
    "PrintfRuntime",
    "SpecifierHandler",
    "TextSink",
    "Written",
    "format_builtin",
    "parse_format",
]
