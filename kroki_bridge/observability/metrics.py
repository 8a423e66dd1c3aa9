from collections import defaultdict
from contextlib import contextmanager
from time import perf_counter
from typing import Iterator

LabelSet = tuple[tuple[str, str], ...]


def _labels(labels: dict[str, str]) -> LabelSet:
    return tuple(sorted((k, str(v)) for k, v in labels.items()))


def _series(name: str, labels: LabelSet) -> str:
    if not labels:
        return name
    rendered = ",".join(f'{k}="{v}"' for k, v in labels)
    return f"{name}{{{rendered}}}"


class MetricsRegistry:
    """Process-local counters and timers rendered in Prometheus text format."""

    def __init__(self) -> None:
        self._counters: dict[str, dict[LabelSet, float]] = defaultdict(lambda: defaultdict(float))
        self._timers_sum: dict[str, float] = defaultdict(float)
        self._timers_count: dict[str, float] = defaultdict(float)

    def inc(self, name: str, value: float = 1.0, **labels: str) -> None:
        self._counters[name][_labels(labels)] += value

    def value(self, name: str, **labels: str) -> float:
        return self._counters.get(name, {}).get(_labels(labels), 0.0)

    def observe_ms(self, name: str, value_ms: float) -> None:
        self._timers_sum[name] += max(0.0, value_ms)
        self._timers_count[name] += 1.0

    @contextmanager
    def track_ms(self, name: str) -> Iterator[None]:
        start = perf_counter()
        try:
            yield
        finally:
            self.observe_ms(name, (perf_counter() - start) * 1000.0)

    def render_prometheus(self) -> str:
        lines: list[str] = []
        for name in sorted(self._counters):
            lines.append(f"# TYPE {name} counter")
            for labels in sorted(self._counters[name]):
                lines.append(f"{_series(name, labels)} {self._counters[name][labels]:.6f}")

        for name in sorted(self._timers_sum):
            lines.append(f"# TYPE {name}_sum_ms gauge")
            lines.append(f"{name}_sum_ms {self._timers_sum[name]:.6f}")
            lines.append(f"# TYPE {name}_count counter")
            lines.append(f"{name}_count {self._timers_count[name]:.0f}")

        return "\n".join(lines) + "\n"
