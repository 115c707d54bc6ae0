"""Request-scoped record of which meal was served on which day."""
from collections import defaultdict
from typing import Dict, List, Optional


class UsageHistory:
    def __init__(self):
        self._days: Dict[str, List[int]] = defaultdict(list)

    def record(self, name: str, day: int):
        self._days[name].append(day)

    def count_in_window(self, name: str, day: int, window: int) -> int:
        '''Uses of `name` in days max(1, day - window + 1) .. day - 1.'''
        first = max(1, day - window + 1)
        return sum(1 for d in self._days.get(name, ()) if first <= d < day)

    def last_used(self, name: str) -> Optional[int]:
        days = self._days.get(name)
        return max(days) if days else None

    def total(self, name: str) -> int:
        return len(self._days.get(name, ()))

    def __contains__(self, name) -> bool:
        return bool(self._days.get(name))

    def __repr__(self) -> str:
        return f"UsageHistory({dict(self._days)})"


__all__ = ["UsageHistory"]
