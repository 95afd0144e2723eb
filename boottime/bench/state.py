# boottime/bench/state.py
from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Measurement:
    """Elapsed time of one boot-and-connect cycle, in nanoseconds."""
    nanos: int

    def __post_init__(self):
        if self.nanos < 0:
            raise ValueError(f"negative duration: {self.nanos}ns")

    @property
    def seconds(self) -> float:
        return self.nanos / 1e9

    @property
    def millis(self) -> float:
        return self.nanos / 1e6


@dataclass
class RunSet:
    measurements: list = field(default_factory=list)
    sealed: bool = False

    def append(self, m: Measurement) -> None:
        if self.sealed:
            raise RuntimeError("run set is sealed, statistics were already computed")
        self.measurements.append(m)

    def seal(self) -> None:
        self.sealed = True

    def values(self) -> list[int]:
        return [m.nanos for m in self.measurements]

    def __len__(self) -> int:
        return len(self.measurements)


@dataclass(frozen=True)
class Outliers:
    mild: tuple = ()
    extreme: tuple = ()


@dataclass(frozen=True)
class SummaryStatistics:
    # all values in nanoseconds
    count: int
    min: float
    max: float
    median: float
    stddev: float
    outliers: Outliers
    percentiles: tuple  # ((75.0, value), (80.0, value), ...)

    def percentile(self, p: float) -> float:
        for point, value in self.percentiles:
            if point == p:
                return value
        raise KeyError(p)


@dataclass
class BenchmarkResult:
    dry_runs: list
    run_set: RunSet
    summary: SummaryStatistics
