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

"""Installs the vector conversions into a ``PrintfRuntime``.

Nothing is registered at import time. ``install`` performs the registration
once per runtime and returns a handle; calling it again for the same runtime
returns the same handle.

Example:
    >>> from vecpf import PrintfRuntime, install, pack_lanes, LaneType
    >>> handle = install(PrintfRuntime())
    >>> handle.sprintf("%vlu", pack_lanes(LaneType.U32, [1, 2, 3, 4]))
    '1 2 3 4'
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from vecpf.config import VecpfConfig
from vecpf.core.adapter import VectorArgumentAdapter, copy_vector
from vecpf.core.dispatch import FLOAT_CONVERSIONS, INTEGER_CONVERSIONS
from vecpf.core.formatter import VectorFormatter
from vecpf.core.lanes import VECTOR_WIDTH_BYTES
from vecpf.core.modifiers import ModifierRegistry
from vecpf.errors import ConfigError, RegistrationError
from vecpf.logging_config import get_logger
from vecpf.printf.runtime import PrintfRuntime, TextSink

logger = get_logger(__name__)

__all__ = ["VectorPrintfHandle", "install", "installed_handle"]


@dataclass(frozen=True)
class VectorPrintfHandle:
    """Everything ``install`` wired into one runtime."""

    runtime: PrintfRuntime
    config: VecpfConfig
    registry: ModifierRegistry
    kind_id: int
    adapter: VectorArgumentAdapter
    formatter: VectorFormatter

    def sprintf(self, fmt: str, *args: Any) -> str:
        return self.runtime.sprintf(fmt, *args)

    def fprintf(self, stream: TextSink, fmt: str, *args: Any) -> int:
        return self.runtime.fprintf(stream, fmt, *args)

    def printf(self, fmt: str, *args: Any) -> int:
        return self.runtime.printf(fmt, *args)


EXTENSION_NAME = "vecpf"
_INSTALL_LOCK = threading.Lock()


def installed_handle(runtime: PrintfRuntime) -> VectorPrintfHandle | None:
    return runtime.extensions.get(EXTENSION_NAME)


def install(
    runtime: PrintfRuntime, config: VecpfConfig | None = None
) -> VectorPrintfHandle:
    """Register the vector modifiers, argument kind and conversions.

    Args:
        runtime: The printf runtime to extend.
        config: Settings to use; defaults to ``VecpfConfig.from_env()``.

    Raises:
        ConfigError: If ``runtime`` already has the extension installed with a
            different configuration.
        RegistrationError: If the runtime refuses one of the registrations.
            Whatever was registered before the refusal is released, so the
            runtime is left as it was and ``install`` can be retried.
    """
    with _INSTALL_LOCK:
        handle = runtime.extensions.get(EXTENSION_NAME)
        if handle is not None:
            if config is not None and config != handle.config:
                raise ConfigError(
                    f"vector printf already installed in {runtime!r} "
                    f"with {handle.config}"
                )
            return handle

        if config is None:
            config = VecpfConfig.from_env()
        kind_id = runtime.register_argument_kind(copy_vector, VECTOR_WIDTH_BYTES)
        try:
            registry = ModifierRegistry.register(runtime)
        except RegistrationError:
            runtime.unregister_argument_kind(kind_id)
            raise
        adapter = VectorArgumentAdapter(registry, kind_id)
        formatter = VectorFormatter(runtime, registry, config.numpy_byteorder)

        for spec in INTEGER_CONVERSIONS:
            runtime.register_specifier(spec, formatter.format_integer, adapter.probe)
        for spec in FLOAT_CONVERSIONS:
            runtime.register_specifier(spec, formatter.format_float, adapter.probe)

        handle = VectorPrintfHandle(
            runtime=runtime,
            config=config,
            registry=registry,
            kind_id=kind_id,
            adapter=adapter,
            formatter=formatter,
        )
        runtime.extensions[EXTENSION_NAME] = handle

    logger.info(
        "Installed vector printf into %r (byteorder=%s, modifiers: %s)",
        runtime,
        config.byteorder,
        ", ".join(e.token for e in registry.entries),
    )
    return handle
