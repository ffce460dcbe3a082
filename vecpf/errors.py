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

"""Exception hierarchy shared by the vector core and the printf host runtime."""

from __future__ import annotations

__all__ = [
    "ArgumentError",
    "ConfigError",
    "FormatSyntaxError",
    "PrintfError",
    "RegistrationError",
    "VecpfError",
]


class VecpfError(Exception):
    """Base exception for all vecpf errors."""


class ConfigError(VecpfError):
    """Raised when a configuration value is missing or invalid."""


class PrintfError(VecpfError):
    """Base exception for errors raised by the printf host runtime."""


class FormatSyntaxError(PrintfError):
    """Raised when a format directive cannot be parsed."""

    def __init__(self, message: str, fmt: str, position: int):
        super().__init__(f"{message} at position {position} in {fmt!r}")
        self.fmt = fmt
        self.position = position


class ArgumentError(PrintfError):
    """Raised when a directive's argument is missing or has the wrong shape."""


class RegistrationError(PrintfError):
    """Raised when a modifier, specifier or argument kind cannot be registered."""
