"""Process-wide logging for ``finease``.

Library modules obtain loggers through :func:`get_logger` and never attach
handlers themselves; until an entrypoint calls :func:`configure_logging` the
``finease`` logger carries only a ``NullHandler`` and stays silent.

Environment:

- ``FINEASE_LOG_LEVEL``: level name or number (default ``INFO``).
- ``FINEASE_LOG_FORMAT``: ``logging.Formatter`` format string.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_ROOT_NAME = "finease"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _level_from(value: int | str) -> int | None:
    if isinstance(value, int):
        return value
    text = value.strip().upper()
    if text.isdigit():
        return int(text)
    return logging.getLevelNamesMapping().get(text)


def _resolve_level(level: int | str | None) -> int:
    # Explicit argument, then the environment; unknown names mean INFO.
    for candidate in (level, os.getenv("FINEASE_LOG_LEVEL")):
        if candidate is None or candidate == "":
            continue
        resolved = _level_from(candidate)
        if resolved is not None:
            return resolved
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach a single ``StreamHandler`` to the ``finease`` logger (idempotent).

    ``stream`` defaults to ``sys.stderr`` as it is at call time so stdout stays
    free for command output such as ``--json``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    root = logging.getLogger(_ROOT_NAME)
    for h in [h for h in root.handlers if isinstance(h, logging.NullHandler)]:
        root.removeHandler(h)

    resolved = _resolve_level(level)
    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setLevel(resolved)
    handler.setFormatter(
        logging.Formatter(fmt or os.getenv("FINEASE_LOG_FORMAT") or _DEFAULT_FORMAT)
    )

    root.setLevel(resolved)
    root.addHandler(handler)
    # Handled here; do not also emit through the root logger.
    root.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if not _CONFIGURED and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
