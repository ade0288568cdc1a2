"""
Test input validation and coverage auditing
"""

import numpy as np
import pytest

from core.exceptions import InvalidInputError, InvalidParameterError
from core.validation import find_coverage_issues, validate_points, validate_size_band
from data.models import CommittedGroup


def test_validate_points_coerces_pairs():
    coords = validate_points([(1, 2), [3.5, 4]])

    assert coords.dtype == float
    assert coords.tolist() == [[1.0, 2.0], [3.5, 4.0]]


def test_validate_points_empty():
    assert validate_points([]).shape == (0, 2)
    with pytest.raises(InvalidInputError):
        validate_points([], allow_empty=False)


@pytest.mark.parametrize("points", [
    [1.0, 2.0],
    [(1.0, 2.0, 3.0)],
    [(1.0, np.inf)],
    [("a", "b")],
])
def test_validate_points_rejects_malformed(points):
    with pytest.raises(InvalidInputError):
        validate_points(points)


def test_validate_size_band():
    validate_size_band(59, 30)
    validate_size_band(5, 5)
    validate_size_band(np.int64(4), 1)

    with pytest.raises(InvalidParameterError, match="must not be smaller"):
        validate_size_band(29, 30)
    with pytest.raises(InvalidParameterError, match="at least 1"):
        validate_size_band(5, 0)


def test_coverage_audit():
    good = [
        CommittedGroup(members=[0, 2], loop=0, label=0),
        CommittedGroup(members=[1], loop=1, label=0),
    ]
    assert find_coverage_issues(good, 3) == []

    duplicated = good + [CommittedGroup(members=[2], loop=2, label=0)]
    issues = find_coverage_issues(duplicated, 3)
    assert len(issues) == 1 and "Point 2" in issues[0]

    issues = find_coverage_issues(good, 4)
    assert issues == ["1 points never assigned: [3]"]

    issues = find_coverage_issues(good + [CommittedGroup(members=[7], loop=2, label=0)], 3)
    assert issues == ["Unknown point indices: [7]"]


def test_committed_group_is_frozen():
    group = CommittedGroup(members=[0, 1], loop=0, label=0)

    assert group.size == 2
    with pytest.raises(Exception):
        group.loop = 3
