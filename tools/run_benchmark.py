# tools/run_benchmark.py
# Usage examples:
#   python3 -m tools.run_benchmark --executable python3 -- -m http.server 8080
#   python3 -m tools.run_benchmark --mode tcp-connect --target localhost:8080 --runs 5 --pause 1 \
#       --executable ./server -- --port 8080
#   python3 -m tools.run_benchmark --json --executable ./server

import argparse
import json
import logging
import sys

from boottime.bench.controller import BenchmarkController
from boottime.bench.report import run_line, summary_lines, to_dict
from boottime.config import MODES, Settings
from boottime.errors import BootTimeError, ConfigError

VERSION = "0.1.0"

logger = logging.getLogger("boottime")


def build_argparser():
    ap = argparse.ArgumentParser(
        prog="time-to-boot-server",
        description="Measure the time to boot a server and make a first connection",
        epilog="tip: use -- to pass flags to the executable, as in "
               "--executable python3 -- -m http.server 8080",
    )
    ap.add_argument("args", nargs="*", help="Arguments passed verbatim to the executable")
    ap.add_argument("--mode", default="http-get", choices=MODES,
                    help="mode for connecting in: http-get, tcp-connect")
    ap.add_argument("--dry-runs", type=int, default=2, help="number of dry runs")
    ap.add_argument("--runs", type=int, default=20, help="number of runs")
    ap.add_argument("--pause", type=int, default=10, help="pause duration (in seconds) between runs")
    ap.add_argument("--target", default="http://localhost:8080/", help="connection target")
    ap.add_argument("--executable", default="", help="executable to run")
    ap.add_argument("--max-wait", type=float, default=None,
                    help="give up on a run after this many seconds (default: wait forever); "
                         "checked between connection attempts, so a request already "
                         "blocked on an unresponsive server is not interrupted")
    ap.add_argument("--json", action="store_true", help="print the summary as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    ap.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return ap


def settings_from_args(args) -> Settings:
    return Settings(
        executable=args.executable,
        args=tuple(args.args),
        mode=args.mode,
        target=args.target,
        dry_runs=args.dry_runs,
        runs=args.runs,
        pause_s=args.pause,
        max_wait_s=args.max_wait,
    ).validate()


def main(argv=None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = settings_from_args(args)
        ctrl = BenchmarkController(
            settings,
            on_dry_run=None if args.json else lambda i, m: print(run_line(m), flush=True),
            on_run=None if args.json else _print_run,
        )
    except ConfigError as e:
        ap.error(str(e))

    try:
        if not args.json:
            print("Dry runs", flush=True)
        result = ctrl.run()
    except BootTimeError as e:
        logger.error("%s", e)
        return 1
    finally:
        ctrl.close()

    if args.json:
        print(json.dumps(to_dict(result), indent=2))
    else:
        print("\n".join(summary_lines(result.summary)))
    return 0


def _print_run(i, m):
    if i == 0:
        print("Runs", flush=True)
    print(run_line(m), flush=True)


if __name__ == "__main__":
    sys.exit(main())
