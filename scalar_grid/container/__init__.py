"""Container package - persisted header + payload format for scalar fields.

Two schemes share the same header:
- CURRENT: length-prefixed float64 payload, read and write
- LEGACY: bare float64 payload with a fixed big-endian assumption, read only

The scheme is always chosen by the caller.
"""
from .codec import (
    ContainerScheme,
    CurrentContainerCodec,
    LegacyContainerCodec,
    read_container,
    read_container_header,
    write_container,
)

__all__ = [
    "ContainerScheme",
    "CurrentContainerCodec",
    "LegacyContainerCodec",
    "read_container",
    "read_container_header",
    "write_container",
]
