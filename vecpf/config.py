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

"""Runtime configuration for vecpf.

Settings are resolved from, lowest to highest precedence:

1. built-in defaults,
2. an optional YAML file (``load_config(path)``),
3. ``VECPF_*`` environment variables,
4. explicit keyword overrides.

Example YAML file::

    byteorder: little
    log_level: DEBUG
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from vecpf.errors import ConfigError

__all__ = [
    "ENV_BYTEORDER",
    "ENV_LOG_LEVEL",
    "VALID_BYTEORDERS",
    "VALID_LOG_LEVELS",
    "VecpfConfig",
    "load_config",
]

ENV_BYTEORDER = "VECPF_BYTEORDER"
ENV_LOG_LEVEL = "VECPF_LOG_LEVEL"

VALID_BYTEORDERS = ("native", "little", "big")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class VecpfConfig:
    """Resolved vecpf settings.

    Attributes:
        byteorder: Byte order used to read lanes out of a vector value.
            ``native`` reinterprets the bytes the way the running machine's
            registers would.
        log_level: If set, ``setup_logging`` is applied at this level when the
            CLI starts. Libraries embedding vecpf normally leave it unset.
    """

    byteorder: str = "native"
    log_level: str | None = None

    def __post_init__(self) -> None:
        if self.byteorder not in VALID_BYTEORDERS:
            raise ConfigError(
                f"byteorder must be one of {', '.join(VALID_BYTEORDERS)}, "
                f"got {self.byteorder!r}"
            )
        if self.log_level is not None:
            level = self.log_level.upper()
            if level not in VALID_LOG_LEVELS:
                raise ConfigError(
                    f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, "
                    f"got {self.log_level!r}"
                )
            object.__setattr__(self, "log_level", level)

    @property
    def numpy_byteorder(self) -> str:
        """Byte order character understood by ``numpy.dtype.newbyteorder``."""
        return {"native": "=", "little": "<", "big": ">"}[self.byteorder]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> VecpfConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_env(
        cls, base: VecpfConfig | None = None, environ: Mapping[str, str] | None = None
    ) -> VecpfConfig:
        """Overlay ``VECPF_*`` environment variables onto ``base``."""
        env = os.environ if environ is None else environ
        config = base or cls()
        overrides: dict[str, Any] = {}
        if env.get(ENV_BYTEORDER):
            overrides["byteorder"] = env[ENV_BYTEORDER].strip().lower()
        if env.get(ENV_LOG_LEVEL):
            overrides["log_level"] = env[ENV_LOG_LEVEL].strip()
        return replace(config, **overrides) if overrides else config


def load_config(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> VecpfConfig:
    """Resolve a ``VecpfConfig`` from file, environment and overrides.

    Args:
        path: Optional YAML file. A missing file is an error; an empty file is
            treated as an empty mapping.
        environ: Environment mapping to read, defaults to ``os.environ``.
        **overrides: Explicit settings; ``None`` values are ignored.

    Raises:
        ConfigError: If the file is unreadable, not a mapping, or any value is
            invalid.
    """
    config = VecpfConfig()
    if path is not None:
        config_path = Path(path)
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        config = VecpfConfig.from_mapping(data)

    config = VecpfConfig.from_env(config, environ)

    explicit = {k: v for k, v in overrides.items() if v is not None}
    if explicit:
        unknown = sorted(set(explicit) - {f.name for f in fields(VecpfConfig)})
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        config = replace(config, **explicit)
    return config
