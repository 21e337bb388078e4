"""Latest-wins coalescing of high-frequency UI notifications.

Scroll events can arrive once per pixel. The scheduler keeps at most one
pending task per key; scheduling again before the next frame replaces the
pending task instead of queueing another one. ``run_frame()`` stands in for
the display refresh and runs whatever is pending, once.
"""

from collections import OrderedDict
from typing import Callable, Dict, Hashable


class FrameScheduler:
    """Coalesce tasks so each key runs at most once per frame."""

    def __init__(self) -> None:
        self._pending: "OrderedDict[Hashable, Callable[[], None]]" = OrderedDict()
        self._superseded = 0
        self._frames = 0

    def schedule(self, key: Hashable, task: Callable[[], None]) -> None:
        """Queue ``task`` for the next frame, superseding any pending task for ``key``."""
        if key in self._pending:
            self._superseded += 1
        self._pending[key] = task

    def cancel(self, key: Hashable) -> bool:
        """Drop the pending task for ``key``. Returns True if one was pending."""
        return self._pending.pop(key, None) is not None

    def has_pending(self, key: Hashable = None) -> bool:
        if key is None:
            return bool(self._pending)
        return key in self._pending

    def run_frame(self) -> int:
        """Run every pending task once, in scheduling order.

        Tasks scheduled while the frame runs wait for the next frame.
        Returns the number of tasks that ran.
        """
        tasks = list(self._pending.values())
        self._pending.clear()
        self._frames += 1
        for task in tasks:
            task()
        return len(tasks)

    @property
    def stats(self) -> Dict[str, int]:
        return {
            "frames": self._frames,
            "superseded": self._superseded,
            "pending": len(self._pending),
        }
