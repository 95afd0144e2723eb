# boottime/prober/tcp.py
import logging
import socket
from functools import lru_cache
from urllib.parse import urlsplit

from boottime.errors import ConfigError
from boottime.prober.base import FAILED, Prober, ProbeOutcome

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}


@lru_cache(maxsize=32)
def parse_address(target: str) -> tuple[str, int]:
    """
    Accept "host:port", "[v6]:port" or a URL and return (host, port).
    URLs without an explicit port fall back to the scheme's default port.
    """
    parts = urlsplit(target if "://" in target else f"//{target}")
    try:
        port = parts.port
    except ValueError as e:
        raise ConfigError(f"invalid port in target {target!r}") from e
    if port is None:
        port = DEFAULT_PORTS.get(parts.scheme)
    if not parts.hostname or port is None:
        raise ConfigError(f"target must look like host:port or a URL, got {target!r}")
    return parts.hostname, port


class TcpConnectProber(Prober):
    """Ready as soon as a TCP connection opens. Nothing is sent on the wire."""

    mode = "tcp-connect"

    def validate_target(self, target: str) -> None:
        parse_address(target)

    def check(self, target: str) -> ProbeOutcome:
        address = parse_address(target)
        try:
            # no timeout argument: platform default connect behaviour
            sock = socket.create_connection(address)
        except OSError as e:
            logger.debug("tcp connect to %s:%s failed: %s", address[0], address[1], e)
            return FAILED
        return ProbeOutcome(True, resource=sock, closer=sock.close)
