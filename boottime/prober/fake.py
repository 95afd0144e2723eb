# boottime/prober/fake.py
from collections import deque

from boottime.prober.base import Prober, ProbeOutcome


class FakeProber(Prober):
    """
    script: iterable of booleans consumed one per check() call.
    Once the script runs dry every check returns `default`.
    Handed-out successful outcomes are kept in `outcomes` so tests can assert
    that they were released.
    """

    mode = "fake"

    def __init__(self, script=None, default: bool = True):
        self.script = deque(script or [])
        self.default = default
        self.calls = 0
        self.targets: list[str] = []
        self.outcomes: list[ProbeOutcome] = []
        self.closed = False

    def check(self, target: str) -> ProbeOutcome:
        self.calls += 1
        self.targets.append(target)
        ok = self.script.popleft() if self.script else self.default
        if not ok:
            return ProbeOutcome(False)
        outcome = ProbeOutcome(True, resource=target, closer=lambda: None)
        self.outcomes.append(outcome)
        return outcome

    def close(self) -> None:
        self.closed = True
