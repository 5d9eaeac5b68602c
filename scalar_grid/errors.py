"""Exception hierarchy for grid ingestion and container I/O.

Every fatal failure derives from :class:`GridError` so callers can catch the
whole family at once. The concrete types also inherit from the builtin they
specialise (``ValueError`` / ``OSError``) so existing ``except ValueError``
handlers keep working.

The only non-fatal condition, a missing or malformed scale sidecar, is not an
exception: it is reported as a warning string on the returned field.
"""

from __future__ import annotations


class GridError(Exception):
    """Base exception for all scalar_grid failures."""


class MetadataError(GridError, ValueError):
    """Raised when the required dimension sidecar is missing or malformed."""


class DecodeError(GridError, ValueError):
    """Raised for an unknown sample encoding / byte order or a short raw buffer."""


class ParseError(GridError, ValueError):
    """Raised when an ASCII sample line cannot be parsed."""


class GridIOError(GridError, OSError):
    """Raised when a source or slice file cannot be opened or fully read."""


class ContainerError(GridError):
    """Raised for any failure while reading or writing a container file."""
