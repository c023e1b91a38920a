"""Lightweight in-memory metrics collector."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict


@dataclass
class MetricSnapshot:
    total_turns: int
    stages: Dict[str, int]
    templates: Dict[str, int]
    relaxed_searches: int
    catalog_failures: int
    generation_failures: int


class MetricsCollector:
    """Thread-safe counters for assistant turns."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_turns = 0
        self._stages: Counter[str] = Counter()
        self._templates: Counter[str] = Counter()
        self._relaxed = 0
        self._catalog_failures = 0
        self._generation_failures = 0

    def record_turn(
        self,
        stage: str,
        template: str,
        *,
        relaxed: bool = False,
        catalog_failed: bool = False,
        generation_failed: bool = False,
    ) -> None:
        with self._lock:
            self._total_turns += 1
            self._stages[stage] += 1
            self._templates[template] += 1
            self._relaxed += int(relaxed)
            self._catalog_failures += int(catalog_failed)
            self._generation_failures += int(generation_failed)

    def snapshot(self) -> MetricSnapshot:
        with self._lock:
            return MetricSnapshot(
                total_turns=self._total_turns,
                stages=dict(self._stages),
                templates=dict(self._templates),
                relaxed_searches=self._relaxed,
                catalog_failures=self._catalog_failures,
                generation_failures=self._generation_failures,
            )
