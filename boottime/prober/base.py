# boottime/prober/base.py
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class ProbeOutcome:
    """
    Result of one readiness check. When ok, `resource` holds whatever the check
    kept open (socket, HTTP response) and `release()` closes it. Release runs at
    most once; using the outcome as a context manager releases on block exit.
    """

    def __init__(self, ok: bool, resource: Any = None, closer: Optional[Callable[[], None]] = None):
        self.ok = ok
        self.resource = resource
        self._closer = closer

    @property
    def released(self) -> bool:
        return self._closer is None

    def release(self) -> None:
        closer, self._closer = self._closer, None
        if closer is not None:
            closer()

    def __enter__(self) -> "ProbeOutcome":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"ProbeOutcome(ok={self.ok}, released={self.released})"


FAILED = ProbeOutcome(False)


class Prober(ABC):
    mode: str = ""

    @abstractmethod
    def check(self, target: str) -> ProbeOutcome:
        """Attempt exactly one connection to target and report whether it is ready."""
        raise NotImplementedError

    def validate_target(self, target: str) -> None:
        """Raise ConfigError if target can never be probed in this mode."""

    def close(self) -> None:
        """Drop anything the prober keeps between checks."""
