from typing import TypedDict


class OutlierReport(TypedDict):
    mild: list[int]
    extreme: list[int]


class SummaryReport(TypedDict):
    dry_runs_ns: list[int]
    runs_ns: list[int]
    count: int
    min_ns: float
    max_ns: float
    median_ns: float
    stddev_ns: float
    outliers: OutlierReport
    percentiles: dict[str, float]  # "97.5" -> nanoseconds
