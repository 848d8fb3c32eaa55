from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, Optional, Tuple

MEMORY_SIZE = 11

logger = logging.getLogger(__name__)


class FrequencyEstimator:
    """
    Estimates how often a cell absorbs signal.

    Keeps the cycle numbers of the last ``MEMORY_SIZE`` absorption events
    (oldest first). Once the memory is full the estimate is the reciprocal of
    the mean spacing between consecutive events.
    """

    __slots__ = ("_memory", "frequency")

    def __init__(self, memory: Optional[Iterable[int]] = None, frequency: float = 0.0) -> None:
        self._memory: Deque[int] = deque()
        self.frequency = frequency
        for cycle in memory or ():
            self.record(cycle)

    @property
    def memory(self) -> Tuple[int, ...]:
        return tuple(self._memory)

    def __len__(self) -> int:
        return len(self._memory)

    def is_full(self) -> bool:
        return len(self._memory) == MEMORY_SIZE

    def record(self, cycle: int) -> None:
        self._memory.append(cycle)
        self._evict()

    def sample(self, cycle: int) -> None:
        memory = self._memory
        memory.append(cycle)
        if len(memory) >= 2 and memory[-1] == memory[-2]:
            memory.pop()
        self._evict()

    def update(self) -> bool:
        if not self.is_full():
            return False
        memory = self._memory
        differences = [later - earlier for earlier, later in zip(memory, list(memory)[1:])]
        mean = sum(differences) / len(differences)
        if mean <= 0:
            logger.debug("degenerate absorption spacing %s; keeping frequency %.4f", list(memory), self.frequency)
            return False
        self.frequency = 1.0 / mean
        return True

    def _evict(self) -> None:
        while len(self._memory) > MEMORY_SIZE:
            self._memory.popleft()
