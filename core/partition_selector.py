"""
Size-constrained partition selection.

Repeatedly clusters the points that are still unassigned, cuts the tree at the
smallest group count whose largest group fits on a bus, and commits every group
that also reaches the minimum load. Undersized groups go back into the pool so
they can merge with other leftovers on the next pass.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from data.models import CommittedGroup
from .dendrogram import (DEFAULT_LINKAGE, SUPPORTED_LINKAGES, Dendrogram, build_dendrogram,
                         cut_dendrogram, iter_cut_profiles)
from .exceptions import InvalidParameterError, NoProgressError
from .validation import validate_points, validate_size_band

logger = logging.getLogger(__name__)


def find_smallest_feasible_cut(dendrogram: Dendrogram, max_size: int, start: int = 2) -> Tuple[int, List[List[int]]]:
    """Return the first k >= start whose largest group is <= max_size, with its groups.

    The scan runs upward one k at a time and stops at the first hit; k = n
    (all singletons) always qualifies, so the scan ends.
    """
    if max_size < 1:
        raise InvalidParameterError(f"max_size must be at least 1, got {max_size}")

    start = min(start, dendrogram.n_leaves)
    for k, largest in iter_cut_profiles(dendrogram, start=start):
        if largest <= max_size:
            return k, cut_dendrogram(dendrogram, k)


def _select_committable(groups: List[List[int]], max_size: int, min_size: int) -> List[Tuple[int, List[int]]]:
    """(label, members) for every group inside [min_size, max_size]"""
    return [(label, members) for label, members in enumerate(groups)
            if min_size <= len(members) <= max_size]


def run(all_points, max_size: int, min_size: int, linkage_method: str = DEFAULT_LINKAGE,
        max_iterations: Optional[int] = None, tracker=None) -> List[CommittedGroup]:
    """Assign every point to exactly one group of at most max_size points.

    Args:
        all_points: sequence of (x, y) pairs; group members are indices into it
        max_size: seats per bus, never exceeded
        min_size: preferred minimum load; only the final leftover group may fall short
        linkage_method: 'complete', 'average' or 'single'
        max_iterations: optional bound on outer loops, exceeded -> NoProgressError
        tracker: optional session logger with log_iteration / log_cut_selected /
            log_group_committed methods

    Returns:
        Committed groups ordered by loop, then label

    Raises:
        InvalidParameterError, InvalidInputError, NoProgressError
    """
    validate_size_band(max_size, min_size)
    if linkage_method not in SUPPORTED_LINKAGES:
        raise InvalidParameterError(f"Unknown linkage method '{linkage_method}', expected one of {SUPPORTED_LINKAGES}")
    coords = validate_points(all_points)

    # Working set holds original indices, in input order
    working = np.arange(len(coords))
    result: List[CommittedGroup] = []
    loop = 0

    while len(working) > 0:
        if tracker:
            tracker.log_iteration(loop, len(working))

        if len(working) <= max_size:
            group = CommittedGroup(members=working.tolist(), loop=loop, label=0)
            result.append(group)
            if tracker:
                tracker.log_group_committed(group, final=True)
            if len(working) < min_size:
                logger.info(f"Final group of {len(working)} points is below min_size={min_size}")
            break

        # Only loops that still have to cut count against the limit
        if max_iterations and loop >= max_iterations:
            raise NoProgressError(loop, len(working), max_size, min_size,
                                  reason=f"iteration limit {max_iterations} reached")

        dendrogram = build_dendrogram(coords[working], method=linkage_method)
        k, groups = find_smallest_feasible_cut(dendrogram, max_size)
        profile = [len(g) for g in groups]
        logger.debug(f"Loop {loop}: k={k}, profile={profile}")
        if tracker:
            tracker.log_cut_selected(loop, k, profile)

        committable = _select_committable(groups, max_size, min_size)
        if not committable:
            raise NoProgressError(loop, len(working), max_size, min_size,
                                  reason=f"cut k={k} has group sizes {sorted(profile, reverse=True)}")

        keep = np.ones(len(working), dtype=bool)
        for label, positions in committable:
            group = CommittedGroup(members=sorted(working[positions].tolist()), loop=loop, label=label)
            result.append(group)
            keep[positions] = False
            if tracker:
                tracker.log_group_committed(group)

        logger.info(f"Loop {loop}: committed {len(committable)} of {k} groups, "
                    f"{int(keep.sum())} points left")
        working = working[keep]
        loop += 1

    return result
