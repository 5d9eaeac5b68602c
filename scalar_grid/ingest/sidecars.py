from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple
import math

from scalar_grid.errors import MetadataError
from scalar_grid.models.volume import DEFAULT_SCALE, WARNING_PREFIX


def sidecar_path(source_path: str | Path, suffix: str) -> Path:
    """
    Path of a sidecar file: the file name is cut at its last '.' and ``suffix`` is appended.

    'head.raw' -> 'head.dim', 'head.' -> 'head.dim', '.raw' -> '.dim';
    a name without any '.' gets the suffix appended.
    """
    p = Path(source_path).expanduser()
    name = p.name
    dot = name.rfind(".")
    base = name[:dot] if dot >= 0 else name
    return p.with_name(base + suffix)


def _read_first_line(path: Path) -> str:
    with path.open("r", encoding="utf-8", errors="replace") as f:
        return f.readline()


def resolve_dimensions(source_path: str | Path, suffix: str = ".dim") -> Tuple[int, int, int]:
    """
    Read (nx, ny, nz) from the dimension sidecar of ``source_path``.

    The first line must hold three whitespace-separated positive integers; extra tokens
    are ignored. There is no default: any problem raises MetadataError.
    """
    path = sidecar_path(source_path, suffix)
    try:
        line = _read_first_line(path)
    except OSError as exc:
        raise MetadataError(f"Cannot read dimension file {path}: {exc}") from exc

    tokens = line.split()
    if len(tokens) < 3:
        raise MetadataError(f"Dimension file {path} must hold 'nx ny nz', got {line.strip()!r}")
    try:
        dims = (int(tokens[0]), int(tokens[1]), int(tokens[2]))
    except ValueError as exc:
        raise MetadataError(f"Dimension file {path} has non-integer values: {line.strip()!r}") from exc
    if any(d <= 0 for d in dims):
        raise MetadataError(f"Dimension file {path} has non-positive dims: {dims}")
    return dims


def resolve_scale(
    source_path: str | Path,
    suffix: str = ".scale",
    warnings: Optional[List[str]] = None,
) -> Tuple[float, float, float]:
    """
    Read (sx, sy, sz) from the scale sidecar of ``source_path``.

    Unlike the dimension file the scale file is optional: when it is missing or
    malformed the default (1, 1, 1) is returned. If ``warnings`` is given, the reason
    for falling back is appended to it.
    """
    path = sidecar_path(source_path, suffix)

    def _fallback(reason: str) -> Tuple[float, float, float]:
        if warnings is not None:
            warnings.append(f"{WARNING_PREFIX}scale sidecar {path.name}: {reason}; using default scale 1 1 1")
        return DEFAULT_SCALE

    try:
        line = _read_first_line(path)
    except FileNotFoundError:
        return _fallback("not found")
    except OSError as exc:
        return _fallback(f"unreadable ({exc})")

    tokens = line.split()
    if len(tokens) < 3:
        return _fallback(f"expected 'sx sy sz', got {line.strip()!r}")
    try:
        scale = (float(tokens[0]), float(tokens[1]), float(tokens[2]))
    except ValueError:
        return _fallback(f"non-numeric values {line.strip()!r}")
    if not all(math.isfinite(s) and s > 0 for s in scale):
        return _fallback(f"non-positive or non-finite values {scale}")
    return scale
