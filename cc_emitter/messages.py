"""
MIDI Control Change messages.

Provides the typed CC dataclasses and parsing of the "<controller>:<value>"
command-line token.
"""

from dataclasses import dataclass

import mido

CONTROL_CHANGE = 0xB0
DATA_MAX = 127
CHANNEL_COUNT = 16


class ParseError(ValueError):
    """Raised when command-line CC input is malformed or out of range."""


@dataclass(frozen=True)
class CCRequest:
    """A controller/value pair requested on the command line."""
    controller: int
    value: int

    def __str__(self) -> str:
        return f"{self.controller}:{self.value}"


@dataclass(frozen=True)
class ControlChange:
    """Control Change MIDI message."""
    channel: int  # 0-based
    control: int
    value: int

    def bytes(self) -> list[int]:
        """Raw message bytes: status, controller, value."""
        return [CONTROL_CHANGE | (self.channel & 0x0F), self.control & 0x7F, self.value & 0x7F]

    def to_mido(self) -> mido.Message:
        return mido.Message(
            "control_change",
            channel=self.channel,
            control=self.control,
            value=self.value,
        )

    def __str__(self) -> str:
        return f"CC#{self.control} value {self.value} on ch#{self.channel + 1}"


def _parse_data_byte(text: str, token: str) -> int:
    # ASCII 0-9 only, int() alone would take signs, underscores and unicode digits
    if not text or not all("0" <= c <= "9" for c in text):
        raise ParseError(f"'{token}': '{text}' is not a decimal number")

    number = int(text)
    if number > DATA_MAX:
        raise ParseError(f"'{token}': {number} is out of range (0-{DATA_MAX})")
    return number


def parse_cc_token(token: str) -> CCRequest:
    """
    Parse a single "<controller>:<value>" token.

    Both sides must be plain decimal numbers in the 7-bit range 0-127.
    Whitespace is not accepted anywhere in the token.

    Raises:
        ParseError: If the token is missing, malformed or out of range.
    """
    if not token:
        raise ParseError("missing CC data, expected <controller>:<value>")

    parts = token.split(":")
    if len(parts) != 2:
        raise ParseError(f"'{token}': expected <controller>:<value>")

    controller, value = parts
    return CCRequest(
        controller=_parse_data_byte(controller, token),
        value=_parse_data_byte(value, token),
    )


def parse_cc_data(data: str) -> list[CCRequest]:
    """
    Parse the CC data argument.

    Several tokens may be joined with commas ("70:104,122:0"); they are
    returned in the order given.
    """
    if not data:
        raise ParseError("missing CC data, expected <controller>:<value>")

    return [parse_cc_token(token) for token in data.split(",")]


def parse_channel(channel: int) -> int:
    """Convert a 1-based channel number to 0-based. 0 is treated as channel 1."""
    if channel == 0:
        return 0
    if 1 <= channel <= CHANNEL_COUNT:
        return channel - 1
    raise ParseError(f"channel {channel} is out of range (1-{CHANNEL_COUNT})")


def build_messages(requests: list[CCRequest], channels: list[int]) -> list[ControlChange]:
    """Build one message per channel and request, keeping request order within a channel."""
    return [
        ControlChange(channel=channel, control=request.controller, value=request.value)
        for channel in channels
        for request in requests
    ]
