"""
MIDI output port discovery and selection.

The host MIDI API is reached through a small backend object so the rest of
the tool can run against a fake one.
"""

from dataclasses import dataclass
from typing import Protocol

import mido


class MidiInitError(RuntimeError):
    """Raised when the platform MIDI subsystem cannot be used."""


@dataclass(frozen=True)
class PortDescriptor:
    """An output port as reported by the host at enumeration time."""
    index: int
    name: str

    def __str__(self) -> str:
        return f"#{self.index} \"{self.name}\""


class OutputPort(Protocol):
    def send(self, message: mido.Message) -> None: ...

    def close(self) -> None: ...


class MidiBackend(Protocol):
    """Host MIDI capability: enumerate output ports and open one of them."""

    def output_names(self) -> list[str]: ...

    def open_output(self, port: PortDescriptor) -> OutputPort: ...


class MidoBackend:
    """MidiBackend over mido (python-rtmidi by default)."""

    def __init__(self, backend_name: str | None = None):
        self.backend_name = backend_name
        self._backend: mido.Backend | None = None

    @property
    def backend(self) -> mido.Backend:
        if self._backend is None:
            if self.backend_name:
                self._backend = mido.Backend(self.backend_name, load=True)
            else:
                self._backend = mido.backend
        return self._backend

    def output_names(self) -> list[str]:
        return self.backend.get_output_names()

    def open_output(self, port: PortDescriptor) -> OutputPort:
        """
        Open the port at the descriptor's index.

        mido opens ports by name, so the name must still sit at that index
        and must not be shared with another output port.

        Raises:
            OSError: If the port moved or its name is ambiguous.
        """
        names = self.output_names()

        if port.index >= len(names) or names[port.index] != port.name:
            raise OSError(f"port {port} is no longer available at that index")
        if names.count(port.name) > 1:
            raise OSError(f"port name \"{port.name}\" is shared by several ports")

        return self.backend.open_output(port.name)


def list_output_ports(backend: MidiBackend) -> list[PortDescriptor]:
    """
    List the MIDI output ports currently available.

    Args:
        backend: Host MIDI backend to query.

    Returns:
        Port descriptors in the order the host reports them.

    Raises:
        MidiInitError: If the MIDI subsystem could not be initialized.
    """
    try:
        names = backend.output_names()
    except Exception as e:
        raise MidiInitError(f"Failed to open MIDI output: {e}") from e

    return [PortDescriptor(index=i, name=name) for i, name in enumerate(names)]


def select_ports(ports: list[PortDescriptor], port_filter: str | None) -> list[PortDescriptor]:
    """
    Select ports whose name contains the filter (case-sensitive).

    No filter selects every port. A filter that matches nothing gives an
    empty list.
    """
    if not port_filter:
        return list(ports)

    return [port for port in ports if port_filter in port.name]
