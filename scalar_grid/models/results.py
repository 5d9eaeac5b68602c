from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizationResult:
    """Extrema and counters from one call to :func:`~scalar_grid.analysis.normalize.normalize`.

    Attributes
    ----------
    source_min, source_max:
        Extrema of the finite input samples (``nan`` if there were none).
    normalized_min, normalized_max:
        Extrema of the finite samples after rescaling and clamping.
    ceiling:
        Upper clamp applied to the rescaled values.
    n_clamped:
        Number of samples pulled down to ``ceiling``.
    n_nonfinite:
        Number of ``nan`` / ``inf`` samples excluded from the extrema scan.
    """

    source_min: float
    source_max: float
    normalized_min: float
    normalized_max: float
    ceiling: float
    n_clamped: int = 0
    n_nonfinite: int = 0

    @property
    def source_range(self) -> float:
        return self.source_max - self.source_min
