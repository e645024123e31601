# pathviz/core/observer.py
#!/usr/bin/env python3
"""
Observation channel between the search core and whoever renders it.

An observer is any callable taking one SearchEvent. The engine calls it
synchronously, in algorithm order, from the thread running the search.
Handing `queue.Queue.put` in as the observer is the usual way to move events
onto a UI thread.
"""

import threading
from typing import List

from pathviz.core.types import Coord, SearchEvent


class EventRecorder:
    """Observer that keeps every event in arrival order."""

    def __init__(self):
        self.events: List[SearchEvent] = []

    def __call__(self, event: SearchEvent) -> None:
        self.events.append(event)

    def coords(self, kind: str) -> List[Coord]:
        return [e.coord for e in self.events if e.kind == kind]

    def clear(self) -> None:
        self.events.clear()


class CancelToken:
    """Cooperative cancellation flag; safe to set from another thread."""

    def __init__(self):
        self._flag = threading.Event()

    def cancel(self) -> None:
        self._flag.set()

    @property
    def cancelled(self) -> bool:
        return self._flag.is_set()

    def clear(self) -> None:
        self._flag.clear()
