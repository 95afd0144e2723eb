# boottime/bench/report.py
from boottime.bench.state import BenchmarkResult, Measurement, SummaryStatistics
from boottime.schemas import SummaryReport

NS_PER_US = 1_000
NS_PER_MS = 1_000_000
NS_PER_S = 1_000_000_000


def _frac(n: int, unit: int, digits: int) -> str:
    whole, rem = divmod(n, unit)
    if not rem:
        return str(whole)
    return f"{whole}.{rem:0{digits}d}".rstrip("0")


def format_duration(nanos: float) -> str:
    """Render nanoseconds as e.g. 850ns, 12.5µs, 1.234567ms, 2.5s, 1m3s."""
    n = int(nanos)  # truncate toward zero, like casting to a whole-ns duration
    if n == 0:
        return "0s"
    sign = "-" if n < 0 else ""
    n = abs(n)
    if n < NS_PER_US:
        return f"{sign}{n}ns"
    if n < NS_PER_MS:
        return f"{sign}{_frac(n, NS_PER_US, 3)}µs"
    if n < NS_PER_S:
        return f"{sign}{_frac(n, NS_PER_MS, 6)}ms"

    hours, rest = divmod(n, 3600 * NS_PER_S)
    minutes, rest = divmod(rest, 60 * NS_PER_S)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_frac(rest, NS_PER_S, 9)}s"


def format_list(measurements) -> str:
    return "[" + " ".join(format_duration(m.nanos) for m in measurements) + "]"


def run_line(m: Measurement) -> str:
    return f"  - {format_duration(m.nanos)}"


def summary_lines(summary: SummaryStatistics) -> list[str]:
    lines = [
        f"Min: {format_duration(summary.min)}",
        f"Max: {format_duration(summary.max)}",
        f"Median: {format_duration(summary.median)} (std dev {format_duration(summary.stddev)})",
        "Outliers:",
        f"  - mild: {format_list(summary.outliers.mild)}",
        f"  - extreme: {format_list(summary.outliers.extreme)}",
        "Percentiles:",
    ]
    for p, value in summary.percentiles:
        lines.append(f"  - {p:f}%: {format_duration(value)}")
    return lines


def to_dict(result: BenchmarkResult) -> SummaryReport:
    s = result.summary
    return {
        "dry_runs_ns": [m.nanos for m in result.dry_runs],
        "runs_ns": result.run_set.values(),
        "count": s.count,
        "min_ns": s.min,
        "max_ns": s.max,
        "median_ns": s.median,
        "stddev_ns": s.stddev,
        "outliers": {
            "mild": [m.nanos for m in s.outliers.mild],
            "extreme": [m.nanos for m in s.outliers.extreme],
        },
        "percentiles": {f"{p:g}": value for p, value in s.percentiles},
    }
