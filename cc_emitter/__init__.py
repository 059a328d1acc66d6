"""
CC emitter: send MIDI Control Change messages to MIDI output ports.
"""

from .devices import MidiBackend, MidiInitError, MidoBackend, PortDescriptor, list_output_ports, select_ports
from .emitter import EmitResult, PortError, PortOpenError, PortWriteError, emit
from .messages import CCRequest, ControlChange, ParseError, parse_cc_data, parse_cc_token

__all__ = [
    "CCRequest",
    "ControlChange",
    "EmitResult",
    "MidiBackend",
    "MidiInitError",
    "MidoBackend",
    "ParseError",
    "PortDescriptor",
    "PortError",
    "PortOpenError",
    "PortWriteError",
    "emit",
    "list_output_ports",
    "parse_cc_data",
    "parse_cc_token",
    "select_ports",
]
