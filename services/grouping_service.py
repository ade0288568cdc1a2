
import time
from typing import Dict, Any, List, Optional

from core.exceptions import CoverageError, GroupingError, InvalidInputError
from core.partition_selector import run
from core.validation import find_coverage_issues, validate_points
from data.config import get_config
from data.models import CommittedGroup, GroupingResult, GroupSummary
from logger_config import get_logger


class GroupingService:
    """Runs the size-constrained grouping with configured defaults and session logging"""

    def __init__(self, config: Optional[Dict[str, Any]] = None, logger=None):
        self.config = config if config is not None else get_config()
        self.logger = logger if logger is not None else get_logger(self.config.get('log_dir', 'logs'))

    def run_grouping(self, points, max_size: Optional[int] = None, min_size: Optional[int] = None,
                     linkage_method: Optional[str] = None,
                     visitor_ids: Optional[List[Optional[str]]] = None) -> Dict[str, Any]:
        """Group points into bus loads and build the response payload.

        Unset parameters fall back to configuration. Grouping errors are logged
        and re-raised; no partial result is returned.
        """
        start_time = time.time()

        max_size = max_size if max_size is not None else self.config['max_size']
        min_size = min_size if min_size is not None else self.config['min_size']
        linkage_method = linkage_method or self.config['linkage_method']

        try:
            coords = validate_points(points)
            if visitor_ids is not None and len(visitor_ids) != len(coords):
                raise InvalidInputError(f"Got {len(visitor_ids)} visitor ids for {len(coords)} points")
            self.logger.log_request(len(coords), max_size, min_size, linkage_method)

            groups = run(coords, max_size, min_size,
                         linkage_method=linkage_method,
                         max_iterations=self.config.get('max_iterations') or None,
                         tracker=self.logger)
        except GroupingError as e:
            self.logger.error(f"Grouping failed: {type(e).__name__}: {e}")
            raise

        issues = find_coverage_issues(groups, len(coords))
        self.logger.log_accounting_check(len(coords), issues)
        if issues:
            raise CoverageError(issues)
        self.logger.log_final_summary(len(coords), groups, min_size, max_size)

        return self._build_response(groups, len(coords), visitor_ids, max_size, min_size,
                                    linkage_method, start_time)

    def _build_response(self, groups: List[CommittedGroup], point_count: int, visitor_ids,
                        max_size, min_size, linkage_method, start_time) -> Dict[str, Any]:
        data = []
        for group in groups:
            ids = [visitor_ids[m] for m in group.members] if visitor_ids else None
            data.append(GroupSummary(members=group.members, loop=group.loop, label=group.label,
                                     size=group.size, visitor_ids=ids))

        result = GroupingResult(
            status="true",
            execution_time=time.time() - start_time,
            data=data,
            group_count=len(groups),
            point_count=point_count,
            undersized_groups=sum(1 for g in groups if g.size < min_size),
            parameters={
                "max_size": max_size,
                "min_size": min_size,
                "linkage_method": linkage_method,
            },
        )
        return result.model_dump()
