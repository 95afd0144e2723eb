# boottime/prober/modes.py
from boottime.errors import ConfigError
from boottime.prober.base import Prober
from boottime.prober.http import HttpGetProber
from boottime.prober.tcp import TcpConnectProber

PROBERS: dict[str, type[Prober]] = {
    TcpConnectProber.mode: TcpConnectProber,
    HttpGetProber.mode: HttpGetProber,
}


def prober_for(mode: str) -> Prober:
    try:
        cls = PROBERS[mode]
    except KeyError:
        raise ConfigError(f"Unknown mode: {mode}") from None
    return cls()
