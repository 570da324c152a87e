"""Exception types raised by the lsisvd linear algebra core.

Every error derives from :class:`LinalgError` and additionally from the
closest built-in exception, so callers may catch either ``LinalgError`` or
e.g. ``ValueError``/``IndexError``.
"""

from __future__ import annotations


class LinalgError(Exception):
    """Base class for all lsisvd errors."""


class DimensionMismatch(LinalgError, ValueError):
    """Operand shapes are incompatible for the requested operation."""


class IndexOutOfBounds(LinalgError, IndexError):
    """An index resolves outside ``[0, size)`` after negative wraparound."""


class InvalidArgument(LinalgError, ValueError):
    """An argument is outside its accepted domain (empty input, bad rank, ...)."""


class SerializationError(LinalgError, ValueError):
    """A serialized payload is malformed or uses an unsupported version."""
