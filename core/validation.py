
from typing import Iterable, List

import numpy as np

from .exceptions import InvalidInputError, InvalidParameterError


def validate_points(points, allow_empty: bool = True) -> np.ndarray:
    """Coerce points into a float array of shape (n, 2) with finite values"""
    try:
        coords = np.asarray(points, dtype=float)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Points must be (x, y) pairs: {e}")

    if coords.size == 0:
        if not allow_empty:
            raise InvalidInputError("Point set is empty")
        return np.empty((0, 2), dtype=float)

    if coords.ndim != 2 or coords.shape[1] != 2:
        raise InvalidInputError(f"Points must have shape (n, 2), got {coords.shape}")

    bad_rows = np.where(~np.isfinite(coords).all(axis=1))[0]
    if len(bad_rows) > 0:
        raise InvalidInputError(f"Point {int(bad_rows[0])} has non-finite coordinates: {coords[bad_rows[0]].tolist()}")

    return coords


def validate_size_band(max_size: int, min_size: int) -> None:
    """Check 1 <= min_size <= max_size"""
    for name, value in (("max_size", max_size), ("min_size", min_size)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise InvalidParameterError(f"{name} must be at least 1, got {value}")

    if max_size < min_size:
        raise InvalidParameterError(f"max_size ({max_size}) must not be smaller than min_size ({min_size})")


def find_coverage_issues(groups: Iterable, n_points: int) -> List[str]:
    """Audit a result set: every index in range(n_points) exactly once"""
    issues = []
    seen = {}

    for group in groups:
        for member in group.members:
            if member in seen:
                issues.append(f"Point {member} in loop {seen[member]} and loop {group.loop} label {group.label}")
            else:
                seen[member] = group.loop

    unknown = sorted(m for m in seen if not 0 <= m < n_points)
    if unknown:
        issues.append(f"Unknown point indices: {unknown}")

    missing = sorted(set(range(n_points)) - set(seen))
    if missing:
        issues.append(f"{len(missing)} points never assigned: {missing[:10]}")

    return issues
