

class GroupingError(Exception):
    """Base error for bus grouping failures"""
    pass


class InvalidInputError(GroupingError):
    """Empty or malformed point set"""
    pass


class InvalidCutError(GroupingError):
    """Requested cut count outside [1, n]"""

    def __init__(self, k: int, n_leaves: int):
        self.k = k
        self.n_leaves = n_leaves
        super().__init__(f"Cannot cut dendrogram of {n_leaves} points into {k} groups (must be 1 to {n_leaves})")


class InvalidParameterError(GroupingError):
    """Bad size band or linkage method"""
    pass


class NoProgressError(GroupingError):
    """An iteration committed nothing while too many points remain"""

    def __init__(self, loop: int, remaining: int, max_size: int, min_size: int, reason: str = ""):
        self.loop = loop
        self.remaining = remaining
        self.max_size = max_size
        self.min_size = min_size
        message = (f"No progress at loop {loop}: {remaining} points left, "
                   f"no group fits band [{min_size}, {max_size}]")
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class CoverageError(GroupingError):
    """A result set that misses or repeats points"""

    def __init__(self, issues):
        self.issues = list(issues)
        super().__init__(f"Result does not cover the input exactly: {'; '.join(self.issues)}")
