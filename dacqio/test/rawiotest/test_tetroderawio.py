"""
Tests of dacqio.rawio.tetroderawio
"""

import pathlib
import tempfile
import unittest

import numpy as np
import quantities as pq

from dacqio.core.errors import MalformedHeader, MissingSentinel, TruncatedPayload
from dacqio.rawio.tetroderawio import TetrodeRawIO
from dacqio.test.tools import tetrode_file, random_waveforms, DATA_START, DATA_END


class TestTetrodeRawIO(unittest.TestCase):
    def setUp(self):
        self.ticks = np.array([0, 96000, 192001, 2**31 - 1])
        self.waveforms = random_waveforms(4)
        self.data = tetrode_file(self.ticks, self.waveforms)

    def decode(self, data, **kwargs):
        reader = TetrodeRawIO(**kwargs)
        reader.decode(data)
        return reader

    def test_decode(self):
        reader = self.decode(self.data)
        self.assertEqual(reader.spike_count(), 4)
        self.assertEqual(reader.header['timebase'], 96000)
        self.assertEqual(reader.header['num_spikes'], 4)
        np.testing.assert_array_equal(reader.get_spike_timestamps(), self.ticks)
        np.testing.assert_allclose(reader.rescale_spike_timestamp(reader.get_spike_timestamps()),
                                   self.ticks / 96000.)
        waveforms = reader.get_spike_raw_waveforms()
        self.assertEqual(waveforms.dtype, np.int8)
        self.assertEqual(waveforms.shape, (4, 4, 50))
        np.testing.assert_array_equal(waveforms, self.waveforms)

    def test_parse_header_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            filename = pathlib.Path(tmpdir) / 'trial.1'
            filename.write_bytes(self.data)
            reader = TetrodeRawIO(filename=filename)
            reader.parse_header()
        self.assertTrue(reader.is_header_parsed)
        self.assertEqual(reader.spike_count(), 4)
        self.assertIn('trial.1', repr(reader))

    def test_only_first_timestamp_copy_used(self):
        copies = [[5, 6, 7]] * 4
        data = tetrode_file(self.ticks, self.waveforms, timestamp_copies=copies)
        reader = self.decode(data)
        np.testing.assert_array_equal(reader.get_spike_timestamps(), self.ticks)
        np.testing.assert_array_equal(reader.get_spike_raw_waveforms(), self.waveforms)

    def test_endianness_invariance(self):
        little = self.decode(self.data, host_byteorder='little')
        big = self.decode(self.data, host_byteorder='big')
        np.testing.assert_array_equal(little.get_spike_timestamps(), big.get_spike_timestamps())
        np.testing.assert_array_equal(little.get_spike_times().magnitude,
                                      big.get_spike_times().magnitude)
        np.testing.assert_array_equal(little.get_spike_raw_waveforms(),
                                      big.get_spike_raw_waveforms())

    def test_padding_ignored(self):
        data = tetrode_file(self.ticks[:2], self.waveforms[:2], padding=3)
        reader = self.decode(data)
        self.assertEqual(reader.spike_count(), 2)

    def test_num_spikes_limits_records(self):
        data = tetrode_file(self.ticks, self.waveforms, num_spikes=3)
        reader = self.decode(data)
        self.assertEqual(reader.spike_count(), 3)
        np.testing.assert_array_equal(reader.get_spike_timestamps(), self.ticks[:3])

    def test_truncated_payload(self):
        data = tetrode_file(self.ticks, self.waveforms)
        end = data.index(DATA_END)
        data = data[:end] + b'\x00' + data[end:]
        with self.assertRaises(TruncatedPayload):
            self.decode(data)

    def test_missing_start_token(self):
        data = self.data.replace(DATA_START, b'')
        with self.assertRaises(MissingSentinel):
            self.decode(data)

    def test_end_token_before_start(self):
        header, rest = self.data.split(DATA_START)
        payload = rest.split(DATA_END)[0]
        data = header + DATA_END + payload + DATA_START
        with self.assertRaises(MissingSentinel):
            self.decode(data)

    def test_missing_timebase(self):
        data = tetrode_file(self.ticks, self.waveforms).replace(b'timebase 96000 hz', b'tb 96000')
        with self.assertRaises(MalformedHeader):
            self.decode(data)

    def test_failed_decode_keeps_previous_state(self):
        reader = self.decode(self.data)
        with self.assertRaises(MissingSentinel):
            reader.decode(b'nothing here')
        self.assertEqual(reader.spike_count(), 4)

    def test_empty_file(self):
        reader = self.decode(tetrode_file([], np.zeros((0, 4, 50))))
        self.assertEqual(reader.spike_count(), 0)
        self.assertEqual(reader.get_spike_raw_waveforms().shape, (0, 4, 50))

    def test_time_slicing(self):
        reader = self.decode(self.data)
        times = reader.get_spike_times(t_start=0.5, t_stop=2.5 * pq.s)
        self.assertEqual(times.units, np.array(1.0) * pq.s)
        np.testing.assert_allclose(times.magnitude, [1.0, 192001 / 96000.])
        self.assertEqual(reader.get_spike_raw_waveforms(t_start=1500 * pq.ms).shape[0], 2)

    def test_rates(self):
        reader = self.decode(self.data)
        self.assertEqual(reader.timebase, 96000 * pq.Hz)
        self.assertEqual(reader.sampling_rate, 48000 * pq.Hz)

    def test_not_parsed(self):
        with self.assertRaises(RuntimeError):
            TetrodeRawIO().get_spike_timestamps()


if __name__ == "__main__":
    unittest.main()
