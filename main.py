#!/usr/bin/env python3
"""
CC Emitter - Entry point.

Sends MIDI Control Change messages, e.g. to toggle a synth's local control (CC#122).
"""

from cc_emitter.cli import main

if __name__ == "__main__":
    main()
