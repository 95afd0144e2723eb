# tests/test_cli_unit.py
import json
import sys

import pytest

from boottime.bench import stats
from boottime.bench.report import format_duration, summary_lines, to_dict
from boottime.bench.state import BenchmarkResult, Measurement, RunSet
from boottime.config import PERCENTILES, Settings
from boottime.errors import ConfigError
from tools.run_benchmark import build_argparser, main, settings_from_args

from conftest import DELAYED_LISTENER


def test_argparser_defaults():
    args = build_argparser().parse_args(["--executable", "server"])
    s = settings_from_args(args)
    assert s.mode == "http-get"
    assert s.dry_runs == 2
    assert s.runs == 20
    assert s.pause_s == 10
    assert s.target == "http://localhost:8080/"
    assert s.max_wait_s is None
    assert s.args == ()


def test_trailing_args_pass_through():
    args = build_argparser().parse_args(
        ["--executable", "python3", "--", "-m", "http.server", "8080"])
    assert settings_from_args(args).args == ("-m", "http.server", "8080")


def test_missing_executable_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--runs", "1"])
    assert exc.value.code == 2
    assert "executable" in capsys.readouterr().err


def test_unknown_mode_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["--mode", "udp", "--executable", "x"])
    assert exc.value.code == 2


def test_http_target_with_bad_port_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--target", "http://127.0.0.1:99999/", "--max-wait", "1", "--executable", "x"])
    assert exc.value.code == 2
    assert "invalid port" in capsys.readouterr().err


def test_max_wait_help_mentions_between_attempts():
    help_text = build_argparser().format_help()
    assert "between connection attempts" in " ".join(help_text.split())


def test_spawn_failure_exits_nonzero():
    rc = main(["--executable", "/nonexistent/boottime-no-such-binary", "--mode", "tcp-connect",
               "--target", "127.0.0.1:1", "--dry-runs", "0", "--runs", "1", "--pause", "0"])
    assert rc == 1


def test_settings_validation():
    with pytest.raises(ConfigError):
        Settings(executable="x", runs=0).validate()
    with pytest.raises(ConfigError):
        Settings(executable="x", dry_runs=-1).validate()
    with pytest.raises(ConfigError):
        Settings(executable="x", pause_s=-1).validate()
    with pytest.raises(ConfigError):
        Settings(executable="x", max_wait_s=0).validate()
    assert Settings(executable="x").validate().executable == "x"


@pytest.mark.parametrize("nanos,expected", [
    (0, "0s"),
    (850, "850ns"),
    (12_500, "12.5µs"),
    (1_234_567, "1.234567ms"),
    (100_000_000, "100ms"),
    (2_500_000_000, "2.5s"),
    (63_000_000_000, "1m3s"),
    (3_600_000_000_000, "1h0m0s"),
    (1_500_000.9, "1.5ms"),
])
def test_format_duration(nanos, expected):
    assert format_duration(nanos) == expected


def _result(values):
    rs = RunSet()
    for v in values:
        rs.append(Measurement(v))
    return BenchmarkResult(dry_runs=[Measurement(5)], run_set=rs,
                           summary=stats.summarize(rs, PERCENTILES))


def test_summary_lines_layout():
    lines = summary_lines(_result([10, 20, 30, 40, 1000]).summary)
    assert lines[0] == "Min: 10ns"
    assert lines[1] == "Max: 1µs"
    assert lines[2] == "Median: 30ns (std dev 390ns)"
    assert "  - mild: []" in lines
    assert "  - extreme: [1µs]" in lines
    assert "  - 75.000000%: 40ns" in lines
    assert lines[-1] == "  - 100.000000%: 1µs"


def test_json_report_shape():
    report = to_dict(_result([10, 20, 30, 40, 1000]))
    assert report["dry_runs_ns"] == [5]
    assert report["runs_ns"] == [10, 20, 30, 40, 1000]
    assert report["outliers"] == {"mild": [], "extreme": [1000]}
    assert list(report["percentiles"]) == ["75", "80", "85", "90", "95", "97.5", "98", "99", "99.9", "100"]
    json.dumps(report)


def test_main_tcp_end_to_end_text(free_port, capsys):
    rc = main([
        "--mode", "tcp-connect", "--target", f"127.0.0.1:{free_port}",
        "--dry-runs", "1", "--runs", "2", "--pause", "0", "--max-wait", "30",
        "--executable", sys.executable, "--", "-c", DELAYED_LISTENER, "0.05", str(free_port),
    ])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert out[0] == "Dry runs"
    assert out[2] == "Runs"
    assert out[5].startswith("Min: ")
    assert "Percentiles:" in out


def test_main_tcp_end_to_end_json(free_port, capsys):
    rc = main([
        "--json", "--mode", "tcp-connect", "--target", f"127.0.0.1:{free_port}",
        "--dry-runs", "0", "--runs", "1", "--pause", "0", "--max-wait", "30",
        "--executable", sys.executable, "--", "-c", DELAYED_LISTENER, "0", str(free_port),
    ])
    assert rc == 0
    report = json.loads(capsys.readouterr().out)
    assert report["count"] == 1
    assert report["min_ns"] == report["max_ns"] == report["percentiles"]["100"]
