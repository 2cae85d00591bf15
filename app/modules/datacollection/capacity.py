"""Capacity gate for the collected events table."""


class CapacityGate:
    """Decides whether the table has room for one more row.

    The gate is full once the row count reaches the ceiling, so the stored
    row count can never exceed it.

    Args:
        ceiling: Maximum number of rows the table may hold (>= 0).
    """

    def __init__(self, ceiling: int):
        if isinstance(ceiling, bool) or not isinstance(ceiling, int):
            raise TypeError(f"ceiling must be an int, got {type(ceiling).__name__}")
        if ceiling < 0:
            raise ValueError(f"ceiling must be >= 0, got {ceiling}")
        self._ceiling = ceiling

    @property
    def ceiling(self) -> int:
        return self._ceiling

    def is_full(self, row_count: int) -> bool:
        """True when ``row_count`` leaves no room for another row."""
        return row_count >= self._ceiling

    def remaining(self, row_count: int) -> int:
        """Number of rows that can still be written."""
        return max(0, self._ceiling - row_count)
