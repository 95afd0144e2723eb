# boottime/bench/stats.py
"""
Descriptive statistics over boot durations.

Quartiles and the percentile report share one linear-interpolation
percentile so outlier fences and reported percentiles agree.
"""
from typing import Iterable, Sequence

import numpy as np

from boottime.bench.state import Measurement, Outliers, RunSet, SummaryStatistics
from boottime.errors import EmptyRunSetError

MILD_FENCE = 1.5
EXTREME_FENCE = 3.0


def _as_array(data: Iterable[float]) -> np.ndarray:
    arr = np.asarray(list(data), dtype=np.float64)
    if arr.size == 0:
        raise EmptyRunSetError("no measurements to summarize")
    return arr


def minimum(data: Iterable[float]) -> float:
    return float(np.min(_as_array(data)))


def maximum(data: Iterable[float]) -> float:
    return float(np.max(_as_array(data)))


def median(data: Iterable[float]) -> float:
    return float(np.median(_as_array(data)))


def stddev(data: Iterable[float]) -> float:
    """Population standard deviation."""
    return float(np.std(_as_array(data), ddof=0))


def percentile(data: Iterable[float], p: float) -> float:
    if not 0.0 <= p <= 100.0:
        raise ValueError(f"percentile must be within [0, 100], got {p}")
    return float(np.percentile(_as_array(data), p, method="linear"))


def quartiles(data: Iterable[float]) -> tuple[float, float]:
    arr = _as_array(data)
    q1, q3 = np.percentile(arr, [25.0, 75.0], method="linear")
    return float(q1), float(q3)


def quartile_outliers(data: Sequence[float]) -> tuple[list, list]:
    """
    Tukey fences. Returns (mild, extreme), each sorted ascending.
    mild: beyond 1.5*IQR from the nearest quartile but within 3*IQR
    extreme: beyond 3*IQR
    """
    q1, q3 = quartiles(data)
    iqr = q3 - q1
    lower_mild, upper_mild = q1 - MILD_FENCE * iqr, q3 + MILD_FENCE * iqr
    lower_extreme, upper_extreme = q1 - EXTREME_FENCE * iqr, q3 + EXTREME_FENCE * iqr

    mild, extreme = [], []
    for v in sorted(data):
        if v < lower_extreme or v > upper_extreme:
            extreme.append(v)
        elif v < lower_mild or v > upper_mild:
            mild.append(v)
    return mild, extreme


def summarize(run_set: RunSet, points: Sequence[float]) -> SummaryStatistics:
    """Seal the run set and compute its summary. Raises EmptyRunSetError when empty."""
    values = run_set.values()
    if not values:
        raise EmptyRunSetError("cannot summarize an empty run set")
    run_set.seal()

    mild, extreme = quartile_outliers(values)
    return SummaryStatistics(
        count=len(values),
        min=minimum(values),
        max=maximum(values),
        median=median(values),
        stddev=stddev(values),
        outliers=Outliers(
            mild=tuple(Measurement(v) for v in mild),
            extreme=tuple(Measurement(v) for v in extreme),
        ),
        percentiles=tuple((p, percentile(values, p)) for p in points),
    )
