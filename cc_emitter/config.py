"""
Run configuration.

Everything comes from the command line; nothing is read from disk or the
environment.
"""

from dataclasses import dataclass, field

from .messages import CCRequest


@dataclass
class EmitterConfig:
    """Root configuration object for one invocation."""
    list_ports: bool = False
    port_filter: str | None = None  # substring of the port name, None means all
    requests: list[CCRequest] = field(default_factory=list)
    channels: list[int] = field(default_factory=lambda: [0])  # 0-based
    verbose: bool = False
    backend: str | None = None  # mido backend module, e.g. "mido.backends.rtmidi"
