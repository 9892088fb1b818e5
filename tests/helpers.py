# tests/helpers.py

from __future__ import annotations

import re
from datetime import datetime, timedelta


class FakeClock:
    """Deterministic stand-in for datetime.now."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def task_ids(html: str) -> list[int]:
    """Task ids linked from a rendered page, in page order."""
    return [int(m) for m in re.findall(r"/tasks/(\d+)/edit", html)]
