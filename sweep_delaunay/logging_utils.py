"""Logging utilities for sweep_delaunay.

All package loggers live under the 'sweep_delaunay' namespace. The package
installs a NullHandler on import, so nothing is printed unless the caller
configures logging, either through the standard library or through
configure_logging() below. The process root logger is never modified.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

ROOT_NAME = 'sweep_delaunay'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO', stream=None) -> logging.Logger:
    """Attach a single stream handler to the package logger and set its level.

    Calling this more than once replaces the previously attached handler
    instead of stacking duplicates.
    """
    root = logging.getLogger(ROOT_NAME)
    for handler in list(root.handlers):
        if getattr(handler, '_sweep_delaunay_handler', False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stdout)
    handler.setFormatter(_FORMAT)
    handler._sweep_delaunay_handler = True
    root.addHandler(handler)
    root.setLevel(_to_level(level))
    root.propagate = False
    return root


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'sweep_delaunay' namespace.

    Module names already inside the package (``__name__``) are used as is;
    anything else is nested below the package logger.
    """
    if name != ROOT_NAME and not name.startswith(ROOT_NAME + '.'):
        name = f'{ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    if level is not None:
        log.setLevel(_to_level(level))
    return log


__all__ = ['get_logger', 'configure_logging', 'ROOT_NAME']
