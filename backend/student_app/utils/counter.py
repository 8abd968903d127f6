"""Thread-safe counter and the two-thread increment demo."""

from __future__ import annotations

import logging
import threading

_LOGGER = logging.getLogger("student_app.counter")


class AtomicCounter:
    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    def increase(self, step: int = 1) -> int:
        with self._lock:
            self._value += step
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


def run_demo(threads: int = 2, increments: int = 10000) -> int:
    """Increment a shared counter from `threads` workers and return the total.

    The result is always `threads * increments`.
    """
    counter = AtomicCounter()

    def _work():
        _LOGGER.debug("worker started: %s", threading.current_thread().name)
        for _ in range(increments):
            counter.increase()

    workers = [threading.Thread(target=_work, name=f"counter-{i}") for i in range(threads)]
    for t in workers:
        t.start()
    for t in workers:
        t.join()
    return counter.value


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    print(run_demo())
