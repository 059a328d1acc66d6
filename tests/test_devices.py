import contextlib
import io
import unittest

import memory_backend
from cc_emitter.devices import MidiInitError, MidoBackend, PortDescriptor, list_output_ports, select_ports
from cc_emitter.emitter import PortOpenError, emit
from cc_emitter.messages import ControlChange
from fakes import FakeBackend


class TestListOutputPorts(unittest.TestCase):
    def test_indices_follow_host_order(self):
        ports = list_output_ports(FakeBackend(["Synth A", "Keyboard", "Synth B"]))
        self.assertEqual(
            ports,
            [
                PortDescriptor(0, "Synth A"),
                PortDescriptor(1, "Keyboard"),
                PortDescriptor(2, "Synth B"),
            ],
        )

    def test_no_ports(self):
        self.assertEqual(list_output_ports(FakeBackend()), [])

    def test_init_failure(self):
        backend = FakeBackend(init_error=OSError("ALSA lib: cannot open /dev/snd/seq"))
        with self.assertRaises(MidiInitError) as ctx:
            list_output_ports(backend)
        self.assertIn("/dev/snd/seq", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, OSError)

    def test_import_failure_is_init_failure(self):
        backend = FakeBackend(init_error=ImportError("No module named 'rtmidi'"))
        with self.assertRaises(MidiInitError):
            list_output_ports(backend)


class TestSelectPorts(unittest.TestCase):
    def setUp(self):
        self.ports = list_output_ports(
            FakeBackend(["Synth A", "Keyboard", "synth lower", "Synth B"])
        )

    def test_no_filter_selects_all(self):
        self.assertEqual(select_ports(self.ports, None), self.ports)

    def test_empty_filter_selects_all(self):
        self.assertEqual(select_ports(self.ports, ""), self.ports)

    def test_substring_is_case_sensitive(self):
        selected = select_ports(self.ports, "Synth")
        self.assertEqual([p.name for p in selected], ["Synth A", "Synth B"])

    def test_selection_matches_containment(self):
        for port_filter in ("Synth", "synth", "A", "board", " ", "Synth A"):
            with self.subTest(port_filter=port_filter):
                expected = [p for p in self.ports if port_filter in p.name]
                self.assertEqual(select_ports(self.ports, port_filter), expected)

    def test_keeps_original_indices(self):
        selected = select_ports(self.ports, "Synth B")
        self.assertEqual(selected, [PortDescriptor(3, "Synth B")])

    def test_no_match(self):
        self.assertEqual(select_ports(self.ports, "Drum Machine"), [])

    def test_does_not_alias_input(self):
        selected = select_ports(self.ports, None)
        selected.clear()
        self.assertEqual(len(self.ports), 4)


class TestMidoBackend(unittest.TestCase):
    def setUp(self):
        memory_backend.reset(["Synth A", "Keyboard"])
        self.backend = MidoBackend("memory_backend")

    def test_lists_names_in_order(self):
        self.assertEqual(
            list_output_ports(self.backend),
            [PortDescriptor(0, "Synth A"), PortDescriptor(1, "Keyboard")],
        )

    def test_backend_loaded_lazily(self):
        backend = MidoBackend("no.such.module")
        self.assertIsNone(backend._backend)

    def test_open_output_sends(self):
        ports = list_output_ports(self.backend)
        out = self.backend.open_output(ports[1])
        out.send(ControlChange(0, 122, 0).to_mido())
        out.close()
        self.assertEqual(memory_backend.opened, [1])
        self.assertEqual(memory_backend.sent, [(1, [0xB0, 122, 0])])

    def test_missing_backend_module(self):
        with self.assertRaises(MidiInitError):
            list_output_ports(MidoBackend("no.such.module"))

    def test_moved_port_is_not_opened(self):
        ports = list_output_ports(self.backend)
        memory_backend.reset(["Keyboard", "Synth A"])
        with self.assertRaises(OSError):
            self.backend.open_output(ports[0])
        self.assertEqual(memory_backend.opened, [])

    def test_same_named_ports_never_hit_one_device_twice(self):
        memory_backend.reset(["USB MIDI Synth", "USB MIDI Synth"])
        ports = list_output_ports(self.backend)
        with contextlib.redirect_stderr(io.StringIO()):
            result = emit(self.backend, ports, [ControlChange(0, 122, 0)])
        self.assertEqual(memory_backend.opened, [])
        self.assertEqual(memory_backend.sent, [])
        self.assertEqual([f.port for f in result.failures], ports)
        self.assertTrue(all(isinstance(f, PortOpenError) for f in result.failures))

    def test_unique_name_beside_duplicates_still_opens(self):
        memory_backend.reset(["USB MIDI Synth", "Keyboard", "USB MIDI Synth"])
        ports = list_output_ports(self.backend)
        with contextlib.redirect_stderr(io.StringIO()):
            result = emit(self.backend, ports, [ControlChange(0, 122, 0)])
        self.assertEqual(result.sent, [ports[1]])
        self.assertEqual(memory_backend.sent, [(1, [0xB0, 122, 0])])


if __name__ == "__main__":
    unittest.main()
