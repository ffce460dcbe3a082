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


"""Logging for vecpf.

Every module logs through a child of the ``vecpf`` logger. As a library,
vecpf stays silent (a lone ``NullHandler``, no propagation) until the
application opts in:

    >>> import vecpf
    >>> vecpf.setup_logging(level="DEBUG")
    >>> vecpf.setup_logging(level="INFO", propagate=True)  # app-owned handlers
"""

import logging
import sys
from typing import Literal, TextIO

VECPF_LOGGER_NAME = "vecpf"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _package_logger() -> logging.Logger:
    return logging.getLogger(VECPF_LOGGER_NAME)


def _clear_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


def _only_null_handler(logger: logging.Logger) -> bool:
    return len(logger.handlers) == 1 and isinstance(
        logger.handlers[0], logging.NullHandler
    )


def setup_logging(
    level: LogLevel = "INFO",
    format: str | None = None,
    filename: str | None = None,
    stream: TextIO | Literal[False] | None = None,
    force: bool = False,
    propagate: bool = False,
) -> None:
    """Turn on vecpf log output.

    Args:
        level: Threshold for the ``vecpf`` logger and the handlers added here.
        format: ``logging.Formatter`` format string; ``DEFAULT_FORMAT`` if None.
        filename: Also append records to this file.
        stream: Where to write records; ``sys.stderr`` if None. ``False`` adds
            no stream handler.
        force: Drop the handlers already attached to the ``vecpf`` logger.
        propagate: Pass records on to the root logger. Without ``filename``
            or ``stream`` no handler is added, so the application's logging
            setup alone decides the output.
    """
    logger = _package_logger()
    log_level = level.upper()
    logger.setLevel(log_level)

    if force or (propagate and _only_null_handler(logger)):
        _clear_handlers(logger)
    logger.propagate = propagate
    if propagate and not filename and stream is None:
        return

    handlers: list[logging.Handler] = []
    if stream is not False:
        handlers.append(logging.StreamHandler(sys.stderr if stream is None else stream))
    if filename:
        handlers.append(logging.FileHandler(filename))

    formatter = logging.Formatter(format or DEFAULT_FORMAT)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def disable_logging() -> None:
    """Back to library mode: no output and no propagation."""
    logger = _package_logger()
    _clear_handlers(logger)
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` inside the ``vecpf`` hierarchy.

    ``__name__`` of a vecpf module is used as is; any other name is nested
    under ``vecpf.``.
    """
    if name != VECPF_LOGGER_NAME and not name.startswith(f"{VECPF_LOGGER_NAME}."):
        name = f"{VECPF_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


if not _package_logger().handlers:
    disable_logging()
