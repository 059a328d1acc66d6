"""
Sending CC messages to the selected output ports.

Each port is opened, written and closed before the next one is touched.
A failing port is reported and skipped; it never stops the others.
"""

import sys
from dataclasses import dataclass, field

from .devices import MidiBackend, PortDescriptor
from .messages import ControlChange


class PortError(Exception):
    """A single output port could not be used."""

    action = "use"

    def __init__(self, port: PortDescriptor, cause: Exception):
        super().__init__(f"Failed to {self.action} port {port}: {cause}")
        self.port = port
        self.cause = cause


class PortOpenError(PortError):
    action = "connect to"


class PortWriteError(PortError):
    action = "send to"


@dataclass
class EmitResult:
    """Outcome of one emission pass."""
    sent: list[PortDescriptor] = field(default_factory=list)
    failures: list[PortError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _close(out, port: PortDescriptor) -> None:
    try:
        out.close()
    except Exception as e:
        print(f"Warning: failed to close port {port}: {e}", file=sys.stderr)


def emit(
    backend: MidiBackend,
    ports: list[PortDescriptor],
    messages: list[ControlChange],
    verbose: bool = False,
) -> EmitResult:
    """
    Send every message to every port, in port order.

    Args:
        backend: Host MIDI backend used to open the ports.
        ports: Ports to write to, as returned by select_ports().
        messages: Messages to send on each port.
        verbose: Print each connection and message.

    Returns:
        EmitResult listing the ports written and the per-port failures.

    Raises:
        ValueError: If a message is not a valid MIDI message. No port is
            opened in that case.
    """
    wire = [(message, message.to_mido()) for message in messages]
    result = EmitResult()

    for port in ports:
        if verbose:
            print(f"Connecting to port {port}")

        try:
            out = backend.open_output(port)
        except Exception as e:
            error = PortOpenError(port, e)
            print(error, file=sys.stderr)
            result.failures.append(error)
            continue

        try:
            for message, mido_message in wire:
                if verbose:
                    print(f"Sending {message}")
                out.send(mido_message)
        except Exception as e:
            error = PortWriteError(port, e)
            print(error, file=sys.stderr)
            result.failures.append(error)
        else:
            result.sent.append(port)
        finally:
            _close(out, port)

    return result
