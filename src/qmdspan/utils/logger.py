"""Logging helpers for qmdspan.

The library never installs handlers; applications (or the host editor
bridge) configure logging however they like.

Levels used across the package:
    DEBUG    scan summaries, cache hits, cursor outside any block
    INFO     each payload sent to a language session
    WARNING  a language with no session command, just before the error

Example:
    >>> from qmdspan.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("scanned %d code blocks", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``qmdspan`` namespace.

    Module names from inside the package pass through unchanged. Any other
    name (an editor bridge registering ``"bridge"``, say) is nested under
    ``qmdspan.`` so one ``logging.getLogger("qmdspan")`` call controls every
    message the scanner and dispatcher emit.

    Example:
        >>> get_logger("dispatch").name
        'qmdspan.dispatch'
        >>> get_logger("qmdspan.matcher").name
        'qmdspan.matcher'
    """
    if not (name == "qmdspan" or name.startswith("qmdspan.")):
        name = f"qmdspan.{name}"
    return logging.getLogger(name)
