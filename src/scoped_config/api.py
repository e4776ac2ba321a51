"""Public API facade.

Assembles stores from :class:`ScopedConfigSettings` so callers do not need
to wire the reader policy and logging by hand.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

from .config import ScopedConfigSettings
from .logging_utils import configure_logging
from .store import ScopedStore
from .sync import SynchronizedStore


def build_store(
    settings: ScopedConfigSettings | None = None,
    logger: logging.Logger | None = None,
    configure: bool = False,
) -> ScopedStore:
    """Create an empty store following the reader settings.

    Root logging is only configured when ``configure`` is set, so libraries
    embedding the store keep their own logging setup.
    """

    settings = settings or ScopedConfigSettings()
    if configure:
        configure_logging(settings.logging)
    reader = settings.reader
    return ScopedStore(
        strict=reader.strict,
        policy=reader.policy(),
        size_limit=reader.max_size_bytes,
        logger=logger,
    )


def load(
    paths: Iterable[str | os.PathLike[str]],
    settings: ScopedConfigSettings | None = None,
    logger: logging.Logger | None = None,
) -> ScopedStore:
    """Read ``paths`` in order into a new store."""

    store = build_store(settings, logger=logger)
    for path in paths:
        store.read(path)
    return store


def load_shared(
    paths: Iterable[str | os.PathLike[str]],
    settings: ScopedConfigSettings | None = None,
    logger: logging.Logger | None = None,
) -> SynchronizedStore:
    """Like :func:`load`, wrapped for use from several threads."""

    return SynchronizedStore(load(paths, settings, logger=logger))
