"""Configuration types for a client session."""

from dataclasses import dataclass

from scpicli.util.defaults import (
    DEFAULT_HEARTBEAT_INTERVAL,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    KEEPALIVE_COUNT,
    KEEPALIVE_IDLE,
    KEEPALIVE_INTERVAL,
)


@dataclass(kw_only=True)
class SessionConfig:
    """Connection and timing parameters, fixed for the life of a session.

    Attributes
    ----------
    host : str
        Instrument host name or address.
    port : int
        TCP port of the instrument's socket server.
    timeout : float
        Seconds to wait for the reply to a query.
    heartbeat_interval : float
        Seconds between liveness peeks in interactive mode.
    keepalive_idle : int
        Idle seconds before the OS sends the first keepalive probe.
    keepalive_interval : int
        Seconds between keepalive probes.
    keepalive_count : int
        Unanswered probes before the OS drops the connection.
    """

    host: str
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    heartbeat_interval: float = DEFAULT_HEARTBEAT_INTERVAL
    keepalive_idle: int = KEEPALIVE_IDLE
    keepalive_interval: int = KEEPALIVE_INTERVAL
    keepalive_count: int = KEEPALIVE_COUNT

    def __post_init__(self):
        """Validate configuration immediately after initialization."""
        self.validate()

    def validate(self) -> None:
        validators = {
            "host": (bool(self.host), "Host must not be empty"),
            "port": (0 < self.port < 65536, "Port must be between 1 and 65535"),
            "timeout": (self.timeout > 0, "Query timeout must be positive"),
            "heartbeat_interval": (
                self.heartbeat_interval > 0,
                "Heartbeat interval must be positive",
            ),
            "keepalive_idle": (self.keepalive_idle > 0, "Keepalive idle must be positive"),
            "keepalive_interval": (
                self.keepalive_interval > 0,
                "Keepalive interval must be positive",
            ),
            "keepalive_count": (self.keepalive_count > 0, "Keepalive count must be positive"),
        }

        for param, (valid, message) in validators.items():
            if not valid:
                raise ValueError(f"{message} (got {getattr(self, param)!r})")
