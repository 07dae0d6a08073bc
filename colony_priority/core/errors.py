"""Exception types raised by the scoring engine."""

from __future__ import annotations


class PriorityError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(PriorityError):
    """A task category cannot be resolved to any strategy."""


class InvalidStateError(PriorityError):
    """A consideration state holds a value that cannot be exported as a tier."""
