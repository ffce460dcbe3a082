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

"""Module-level printf functions backed by a shared, lazily created runtime.

Most callers only need these::

    >>> import numpy as np
    >>> import vecpf
    >>> vecpf.sprintf("%vlx", np.array([1, 2, 255, 4096], dtype=np.uint32))
    '1 2 ff 1000'

The first call creates a ``PrintfRuntime`` and installs the vector conversions
into it using ``VecpfConfig.from_env()``. Code that needs its own settings
should create a runtime and call ``install`` directly.
"""

from __future__ import annotations

import threading
from typing import Any

from vecpf.core.install import VectorPrintfHandle, install
from vecpf.printf.runtime import PrintfRuntime, TextSink

__all__ = ["default_handle", "default_runtime", "fprintf", "printf", "sprintf"]

_default_handle: VectorPrintfHandle | None = None
_default_lock = threading.Lock()


def default_handle() -> VectorPrintfHandle:
    global _default_handle
    with _default_lock:
        if _default_handle is None:
            _default_handle = install(PrintfRuntime(name="vecpf"))
        return _default_handle


def default_runtime() -> PrintfRuntime:
    """The process-wide runtime with the vector conversions installed."""
    return default_handle().runtime


def sprintf(fmt: str, *args: Any) -> str:
    return default_runtime().sprintf(fmt, *args)


def fprintf(stream: TextSink, fmt: str, *args: Any) -> int:
    return default_runtime().fprintf(stream, fmt, *args)


def printf(fmt: str, *args: Any) -> int:
    return default_runtime().printf(fmt, *args)
