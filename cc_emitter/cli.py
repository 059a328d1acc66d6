"""
Command-line interface for the CC emitter.
"""

import argparse
import io
import sys
from typing import Callable

from .config import EmitterConfig
from .devices import MidiBackend, MidiInitError, MidoBackend, list_output_ports, select_ports
from .emitter import emit
from .messages import CHANNEL_COUNT, ParseError, build_messages, parse_cc_data, parse_channel

EXIT_OK = 0
EXIT_FAILURE = 1


def cmd_list(config: EmitterConfig, backend: MidiBackend) -> int:
    """List available MIDI output ports."""
    available = list_output_ports(backend)
    ports = select_ports(available, config.port_filter)

    if not available:
        print("No MIDI output ports found.")
        return EXIT_OK
    if not ports:
        print(f"No MIDI output ports match \"{config.port_filter}\" ({len(available)} available).")
        return EXIT_OK

    print("Available MIDI output ports:")
    print()
    for port in ports:
        print(f"  [{port.index}] {port.name}")
    print()

    return EXIT_OK


def cmd_send(config: EmitterConfig, backend: MidiBackend) -> int:
    """Send the requested CC messages to every selected port."""
    ports = list_output_ports(backend)
    selected = select_ports(ports, config.port_filter)

    if config.verbose:
        for port in ports:
            if port not in selected:
                print(f"Skipping port {port} because it doesn't contain \"{config.port_filter}\"")
        if not selected:
            print("No MIDI output ports selected, nothing to send.")

    messages = build_messages(config.requests, config.channels)
    result = emit(backend, selected, messages, verbose=config.verbose)

    if not result.ok:
        print(
            f"Error: {len(result.failures)} of {len(selected)} ports failed",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cc-emitter",
        description="Send MIDI Control Change messages to MIDI output ports",
        epilog='Example: cc-emitter "122:0" Synth  (local control off on ports named *Synth*)',
    )
    parser.add_argument(
        "data",
        nargs="?",
        metavar="DATA",
        help="CC data as <controller>:<value>, both decimal 0-127. "
             "Several pairs may be joined with commas, e.g. 70:104,122:0",
    )
    parser.add_argument(
        "port_filter",
        nargs="?",
        metavar="FILTER",
        help="Only use ports whose name contains FILTER (default: all ports)",
    )
    parser.add_argument(
        "-l", "--list",
        action="store_true",
        dest="list_ports",
        help="List output ports and exit (DATA is ignored)",
    )
    parser.add_argument(
        "-c", "--channel",
        type=int,
        default=1,
        help=f"MIDI channel 1-{CHANNEL_COUNT} to send on (default: 1)",
    )
    parser.add_argument(
        "-a", "--all-channels",
        action="store_true",
        help=f"Send on all {CHANNEL_COUNT} channels",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report each port and message",
    )
    parser.add_argument(
        "--backend",
        default=None,
        help="mido backend module (default: mido's default, python-rtmidi)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> EmitterConfig:
    """
    Parse the command line into an EmitterConfig.

    Exits with status 2 and usage on stderr if the input is invalid.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    config = EmitterConfig(
        list_ports=args.list_ports,
        port_filter=args.port_filter,
        verbose=args.verbose,
        backend=args.backend,
    )

    if config.list_ports:
        return config

    if args.data is None:
        parser.error("missing CC data, expected <controller>:<value>")

    try:
        config.requests = parse_cc_data(args.data)
        if args.all_channels:
            config.channels = list(range(CHANNEL_COUNT))
        else:
            config.channels = [parse_channel(args.channel)]
    except ParseError as e:
        parser.error(str(e))

    return config


def main(argv: list[str] | None = None, backend: MidiBackend | None = None) -> None:
    """Main entry point."""
    config = parse_args(argv)

    if backend is None:
        backend = MidoBackend(config.backend)

    func: Callable[[EmitterConfig, MidiBackend], int] = cmd_list if config.list_ports else cmd_send

    # Ensure unbuffered output
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(line_buffering=True)

    try:
        code = func(config, backend)
    except MidiInitError as e:
        print(f"Error: {e}", file=sys.stderr)
        code = EXIT_FAILURE

    sys.exit(code)
