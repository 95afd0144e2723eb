# boottime/bench/controller.py

import logging
import subprocess
import time
from typing import Callable, Optional

from boottime.bench.state import BenchmarkResult, Measurement, RunSet
from boottime.bench.stats import summarize
from boottime.config import Settings
from boottime.errors import BootTimeoutError, SpawnError
from boottime.prober.base import Prober
from boottime.prober.modes import prober_for

logger = logging.getLogger(__name__)

RunCallback = Callable[[int, Measurement], None]


class BenchmarkController:
    def __init__(self,
                 settings: Settings,
                 prober: Optional[Prober] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], int] = time.perf_counter_ns,
                 on_dry_run: Optional[RunCallback] = None,
                 on_run: Optional[RunCallback] = None):
        self.s = settings.validate()
        self.prober = prober if prober is not None else prober_for(settings.mode)
        self.prober.validate_target(settings.target)
        self.sleep = sleep
        self.clock = clock
        self.on_dry_run = on_dry_run
        self.on_run = on_run

    @property
    def command(self) -> list[str]:
        return [self.s.executable, *self.s.args]

    def measure_once(self) -> Measurement:
        """Boot the server once and return the time until its first successful probe."""
        start = self.clock()
        proc = self._boot()
        try:
            elapsed = self._wait_until_ready(start)
        finally:
            self._teardown(proc)
        return Measurement(elapsed)

    def run(self) -> BenchmarkResult:
        dry_runs = []
        for i in range(self.s.dry_runs):
            m = self.measure_once()
            dry_runs.append(m)
            logger.info("dry run %d/%d: %dns", i + 1, self.s.dry_runs, m.nanos)
            if self.on_dry_run:
                self.on_dry_run(i, m)
            self.sleep(self.s.pause_s)

        run_set = RunSet()
        for i in range(self.s.runs):
            m = self.measure_once()
            run_set.append(m)
            logger.info("run %d/%d: %dns", i + 1, self.s.runs, m.nanos)
            if self.on_run:
                self.on_run(i, m)
            self.sleep(self.s.pause_s)

        summary = summarize(run_set, self.s.percentiles)
        return BenchmarkResult(dry_runs=dry_runs, run_set=run_set, summary=summary)

    def close(self) -> None:
        self.prober.close()

    # -------------------------------
    # boot / poll / teardown
    # -------------------------------
    def _boot(self) -> subprocess.Popen:
        try:
            proc = subprocess.Popen(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise SpawnError(self.command, e) from e
        logger.debug("started pid %d: %s", proc.pid, self.command)
        return proc

    def _wait_until_ready(self, start: int) -> int:
        target = self.s.target
        deadline = None
        if self.s.max_wait_s is not None:
            deadline = start + int(self.s.max_wait_s * 1e9)

        attempts = 0
        while True:
            attempts += 1
            with self.prober.check(target) as outcome:
                if outcome.ok:
                    elapsed = self.clock() - start
                    logger.debug("%s ready after %d attempts", target, attempts)
                    return elapsed

            if deadline is not None and self.clock() >= deadline:
                raise BootTimeoutError(
                    f"{target} not ready after {self.s.max_wait_s}s ({attempts} attempts)"
                )
            if self.s.poll_interval_s:
                self.sleep(self.s.poll_interval_s)

    def _teardown(self, proc: subprocess.Popen) -> None:
        proc.kill()
        proc.wait()
        logger.debug("pid %d exited with %s", proc.pid, proc.returncode)
