"""
Tests of dacqio.io.inputio
"""

import pathlib
import tempfile
import unittest

import numpy as np

from dacqio.core.errors import InvalidRecordData, UnknownEventType
from dacqio.core.records import EventKind, EventRecord
from dacqio.io.inputio import InputIO, read_input, write_input, decode_input, encode_input
from dacqio.test.tools import input_file


class TestInputIO(unittest.TestCase):
    records = [
        (10000, ord('I'), 0x0003),
        (20000, ord('O'), -1),
        (96000, ord('K'), 0),
    ]

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.dirname = pathlib.Path(self.tmpdir.name)
        self.data = input_file(self.records)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_roundtrip_bytes(self):
        header, timestamps, kinds, states = decode_input(self.data)
        content = encode_input(header, timestamps, kinds, states)
        payload = content[content.index(b'data_start') + 10:content.index(b'\r\ndata_end')]
        expected = self.data[self.data.index(b'data_start') + 10:self.data.index(b'\r\ndata_end')]
        self.assertEqual(payload, expected)

    def test_write_read(self):
        header, _, _, _ = decode_input(self.data)
        filename = self.dirname / 'trial.inp'
        write_input(filename, header, [0.5, 1.0], ['I', b'K'], [7, 0])
        _, timestamps, kinds, states = read_input(filename)
        np.testing.assert_allclose(timestamps, [0.5, 1.0])
        self.assertEqual(kinds, [EventKind.DigitalInput, EventKind.KeyPress])
        np.testing.assert_array_equal(states, [7, 0])

    def test_default_states(self):
        header, _, _, _ = decode_input(self.data)
        content = encode_input(header, [0.1], [EventKind.DigitalOutput])
        _, _, _, states = decode_input(content)
        np.testing.assert_array_equal(states, [0])

    def test_unknown_type(self):
        header, _, _, _ = decode_input(self.data)
        with self.assertRaises(UnknownEventType):
            encode_input(header, [0.1], ['X'])
        with self.assertRaises(UnknownEventType):
            encode_input(header, [0.1], [0x58])

    def test_length_mismatch(self):
        header, _, _, _ = decode_input(self.data)
        with self.assertRaises(InvalidRecordData):
            encode_input(header, [0.1, 0.2], ['I'])
        with self.assertRaises(InvalidRecordData):
            encode_input(header, [0.1], ['I'], [1, 2])
        with self.assertRaises(InvalidRecordData):
            encode_input(header, [0.1], ['I'], [40000])

    def test_read_events(self):
        filename = self.dirname / 'trial.inp'
        filename.write_bytes(self.data)
        events = InputIO(filename=filename).read_events()
        self.assertEqual(len(events), 3)
        self.assertIsInstance(events[0], EventRecord)
        self.assertEqual(events[1].kind, EventKind.DigitalOutput)
        self.assertEqual(events[1].channel_state, -1)
        self.assertEqual(events[2].timestamp, 1.0)


if __name__ == "__main__":
    unittest.main()
