# boottime/prober/http.py
import logging
from urllib.parse import urlsplit

import requests

from boottime.errors import ConfigError
from boottime.prober.base import FAILED, Prober, ProbeOutcome

logger = logging.getLogger(__name__)


class HttpGetProber(Prober):
    """
    Ready when a GET on the target answers 200. The body is drained before the
    check returns so the measured time covers the full first response.
    """

    mode = "http-get"

    def __init__(self, session: requests.Session | None = None):
        if session is None:
            session = requests.Session()
            # talk to the server directly, never through an env-configured proxy
            session.trust_env = False
        self.session = session

    def validate_target(self, target: str) -> None:
        parts = urlsplit(target)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError(f"http-get needs an http(s) URL target, got {target!r}")
        try:
            parts.port
        except ValueError as e:
            raise ConfigError(f"invalid port in target {target!r}") from e
        if not parts.hostname:
            raise ConfigError(f"missing host in target {target!r}")

    def check(self, target: str) -> ProbeOutcome:
        try:
            # no timeout: a server that accepts but never answers blocks here
            resp = self.session.get(target, stream=True)
        except requests.RequestException as e:
            logger.debug("GET %s failed: %s", target, e)
            return FAILED

        if resp.status_code != 200:
            logger.debug("GET %s answered %s", target, resp.status_code)
            resp.close()
            return FAILED

        try:
            for _ in resp.iter_content(chunk_size=64 * 1024):
                pass
        except requests.RequestException as e:
            logger.debug("GET %s body read failed: %s", target, e)
            resp.close()
            return FAILED
        return ProbeOutcome(True, resource=resp, closer=resp.close)

    def close(self) -> None:
        self.session.close()
