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

"""
vecpf: printf conversions for 16-byte SIMD vector values.

A vector argument is rendered lane by lane through the matching scalar
conversion, so ``%vld`` prints four ints and ``%vvf`` two doubles::

    >>> import vecpf
    >>> v = vecpf.pack_lanes(vecpf.LaneType.I16, [-3, 0, 7, 1, 2, 3, 4, 5])
    >>> vecpf.sprintf("%+vhd", v)
    '-3 +0 +7 +1 +2 +3 +4 +5'
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("vecpf")
except PackageNotFoundError:
    # Fallback for development/editable installs when package is not installed
    __version__ = "0.0.0-dev"

from vecpf.api import default_runtime, fprintf, printf, sprintf
from vecpf.config import VecpfConfig, load_config
from vecpf.core import (
    LaneType,
    ModifierRegistry,
    VectorModifier,
    VectorPrintfHandle,
    decode_lanes,
    install,
    pack_lanes,
)
from vecpf.errors import (
    ArgumentError,
    ConfigError,
    FormatSyntaxError,
    PrintfError,
    RegistrationError,
    VecpfError,
)
from vecpf.logging_config import disable_logging, get_logger, setup_logging
from vecpf.printf import (
    Declined,
    Failed,
    FormatResult,
    PrintfInfo,
    PrintfRuntime,
    Written,
)

__all__ = [
    "ArgumentError",
    "ConfigError",
    "Declined",
    "Failed",
    "FormatResult",
    "FormatSyntaxError",
    "LaneType",
    "ModifierRegistry",
    "PrintfError",
    "PrintfInfo",
    "PrintfRuntime",
    "RegistrationError",
    "VecpfConfig",
    "VecpfError",
    "VectorModifier",
    "VectorPrintfHandle",
    "Written",
    "__version__",
    "decode_lanes",
    "default_runtime",
    "disable_logging",
    "fprintf",
    "get_logger",
    "install",
    "load_config",
    "pack_lanes",
    "printf",
    "setup_logging",
    "sprintf",
]
