"""Analysis package.

Design principle:
  - Ingest produces :class:`~scalar_grid.models.volume.ScalarField` objects in source units.
  - Analysis rescales them for downstream consumers (topological / graph tooling lives elsewhere).

Normalization is destructive: once a field is normalized its physical units are gone.
"""

from .normalize import DEFAULT_CEILING, normalize, normalize_field

__all__ = [
    "DEFAULT_CEILING",
    "normalize",
    "normalize_field",
]
