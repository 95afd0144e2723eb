# boottime/errors.py


class BootTimeError(Exception):
    """Base class for every error raised by boottime."""


class ConfigError(BootTimeError, ValueError):
    """Invalid or missing configuration, detected before any run starts."""


class SpawnError(BootTimeError):
    """The server process could not be started."""

    def __init__(self, command, cause: OSError):
        super().__init__(f"could not start {command!r}: {cause}")
        self.command = command
        self.cause = cause


class BootTimeoutError(BootTimeError):
    """The server did not answer within the configured max wait."""


class EmptyRunSetError(BootTimeError, ValueError):
    """Statistics were requested over an empty set of measurements."""
