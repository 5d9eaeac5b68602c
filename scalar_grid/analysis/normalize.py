from __future__ import annotations

from dataclasses import replace

import numpy as np

from scalar_grid.models.results import NormalizationResult
from scalar_grid.models.volume import WARNING_PREFIX, ScalarField


DEFAULT_CEILING = 0.9999


def normalize(values: np.ndarray, ceiling: float = DEFAULT_CEILING) -> NormalizationResult:
    """Min-max rescale ``values`` in place.

    Steps
    -----
    1. min / max over the finite samples only.
    2. Range ``max - min``; a constant field uses a range of 1.0, so it maps to all zeros.
    3. ``v -> (v - min) / range``.
    4. Values above ``ceiling`` are set to exactly ``ceiling``. There is no lower clamp.

    Non-finite samples are not part of the extrema but still go through steps 3-4:
    ``nan`` stays ``nan``, ``+inf`` becomes ``ceiling``, ``-inf`` stays ``-inf``.
    A field without any finite sample is only clamped.

    Parameters
    ----------
    values:
        1D float64 array, modified in place.
    ceiling:
        Upper clamp, 0.9999 by default.

    Returns
    -------
    NormalizationResult
        Extrema before and after rescaling plus clamp / non-finite counters.
    """
    if not isinstance(values, np.ndarray) or values.dtype != np.float64:
        raise TypeError("normalize() needs a float64 numpy array (it works in place)")
    if not values.flags.writeable:
        raise ValueError("normalize() needs a writable array")

    finite = np.isfinite(values)
    n_nonfinite = int(values.size - np.count_nonzero(finite))

    if n_nonfinite == values.size:
        src_min = src_max = float("nan")
    else:
        src_min = float(values[finite].min())
        src_max = float(values[finite].max())
        with np.errstate(over="ignore"):
            diff = src_max - src_min
        if diff == 0:
            diff = 1.0
        with np.errstate(invalid="ignore"):
            if np.isfinite(diff):
                values -= src_min
                values /= diff
            else:
                # Extrema span more than the float64 range: shift and divide at half scale.
                values *= 0.5
                values -= 0.5 * src_min
                values /= 0.5 * src_max - 0.5 * src_min

    with np.errstate(invalid="ignore"):
        over = values > ceiling
    n_clamped = int(np.count_nonzero(over))
    values[over] = ceiling

    finite = np.isfinite(values)
    if np.any(finite):
        out_min = float(values[finite].min())
        out_max = float(values[finite].max())
    else:
        out_min = out_max = float("nan")

    return NormalizationResult(
        source_min=src_min,
        source_max=src_max,
        normalized_min=out_min,
        normalized_max=out_max,
        ceiling=float(ceiling),
        n_clamped=n_clamped,
        n_nonfinite=n_nonfinite,
    )


def normalize_field(field: ScalarField, ceiling: float = DEFAULT_CEILING) -> ScalarField:
    """Normalize ``field.values`` in place and return the field with its extrema attached.

    The returned object shares the (now rescaled) array with ``field``; the diagnostic
    extrema are appended to its warnings.
    """
    result = normalize(field.values, ceiling=ceiling)
    warnings = list(field.warnings)
    if result.n_nonfinite:
        warnings.append(f"{WARNING_PREFIX}{result.n_nonfinite} non-finite samples excluded from min/max")
    warnings.append(
        f"normalized: source range [{result.source_min:.6g}, {result.source_max:.6g}] "
        f"-> [{result.normalized_min:.6g}, {result.normalized_max:.6g}]"
    )
    return replace(field, warnings=tuple(warnings), normalization=result)
