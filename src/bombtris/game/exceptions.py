from __future__ import annotations


class BombtrisError(Exception):
    """Base class for errors raised by the Bombtris engine."""


class InvalidConfigError(BombtrisError, ValueError):
    """Raised when a configuration object holds values the engine cannot run with."""
