# boottime/config.py
from dataclasses import dataclass, field
from typing import Literal, Optional

from boottime.errors import ConfigError

ConnectionMode = Literal["tcp-connect", "http-get"]
MODES: tuple[str, ...] = ("http-get", "tcp-connect")

PERCENTILES: tuple[float, ...] = (75.0, 80.0, 85.0, 90.0, 95.0, 97.5, 98.0, 99.0, 99.9, 100.0)


@dataclass(frozen=True)
class Settings:
    executable: str = ""
    args: tuple[str, ...] = ()
    mode: ConnectionMode = "http-get"
    target: str = "http://localhost:8080/"
    dry_runs: int = 2
    runs: int = 20
    pause_s: float = 10.0

    # None waits for the server forever
    max_wait_s: Optional[float] = None
    # 0 means busy-poll, no sleep between connection attempts
    poll_interval_s: float = 0.0

    percentiles: tuple[float, ...] = field(default=PERCENTILES)

    def validate(self) -> "Settings":
        """Raise ConfigError on the first invalid field, return self otherwise."""
        if not self.executable:
            raise ConfigError("An executable must be specified")
        if self.mode not in MODES:
            raise ConfigError(f"Unknown mode: {self.mode}")
        if not self.target:
            raise ConfigError("A connection target must be specified")
        if self.dry_runs < 0:
            raise ConfigError(f"dry runs must be >= 0, got {self.dry_runs}")
        if self.runs < 1:
            raise ConfigError(f"runs must be >= 1, got {self.runs}")
        if self.pause_s < 0:
            raise ConfigError(f"pause must be >= 0, got {self.pause_s}")
        if self.max_wait_s is not None and self.max_wait_s <= 0:
            raise ConfigError(f"max wait must be > 0, got {self.max_wait_s}")
        if self.poll_interval_s < 0:
            raise ConfigError(f"poll interval must be >= 0, got {self.poll_interval_s}")
        for p in self.percentiles:
            if not 0.0 <= p <= 100.0:
                raise ConfigError(f"percentile out of range: {p}")
        return self
