"""
This class reads tetrode spike files (.1 to .32) from the Axona dacqUSB
system.

File format overview:
http://space-memory-navigation.org/DacqUSBFileFormats.pdf

In unit mode every spike is stored as 1 ms of signal (200 us before to
800 us after the trigger), 50 int8 samples per channel. Each of the 4
channels is preceded by a copy of the spike's big-endian int32 timestamp,
so one spike takes 4 * (4 + 50) = 216 bytes. The four copies are
identical; only the first is read. Timestamps are divided by the header
`timebase` (usually 96 kHz) to give seconds.

Data is padded beyond `num_spikes` records; the padding is dropped.

"""

import numpy as np
import quantities as pq

from .basedacqrawio import BaseDacqRawIO
from . import endian


class TetrodeRawIO(BaseDacqRawIO):
    """
    Class for reading spikes from a dacqUSB tetrode file.

    Usage::

        import dacqio.rawio
        r = dacqio.rawio.TetrodeRawIO(filename='20140815-180secs.1')
        r.parse_header()
        print(r)
        ticks = r.get_spike_timestamps()
        times = r.rescale_spike_timestamp(ticks)
        waveforms = r.get_spike_raw_waveforms()  # (nb_spikes, 4, 50) int8

    """

    name = "TetrodeRawIO"
    description = "Spike times and waveforms from dacqUSB tetrode files"
    extensions = [str(i) for i in range(1, 33)]

    num_channels = 4
    samples_per_spike = 50
    timestamp_size = 4
    # bytes per channel block: timestamp copy then samples
    channel_block_size = timestamp_size + samples_per_spike
    record_size = num_channels * channel_block_size
    count_key = 'num_spikes'

    def _parse_payload(self, header, raw):
        nb_spikes = raw.shape[0]
        blocks = raw.reshape(nb_spikes, self.num_channels, self.channel_block_size)

        # spike times are repeated for each contact -> use only first contact
        ticks = endian.to_host_int32(blocks[:, 0, :self.timestamp_size].tobytes(),
                                     host_byteorder=self.host_byteorder)
        waveforms = blocks[:, :, self.timestamp_size:].view('int8').copy()

        self.logger.debug(f"decoded {nb_spikes} spikes")
        return {
            '_spike_ticks': ticks,
            '_spike_times': self._rescale_timestamp(header, ticks),
            '_waveforms': waveforms,
        }

    def spike_count(self):
        self._check_parsed()
        return self._spike_ticks.shape[0]

    def get_spike_timestamps(self, t_start=None, t_stop=None):
        """
        Return spike timestamps in ticks of the header `timebase`, optionally
        restricted to [t_start, t_stop] seconds.
        """
        self._check_parsed()
        mask = self._get_temporal_mask(t_start, t_stop)
        return self._spike_ticks[mask]

    def rescale_spike_timestamp(self, spike_timestamps, dtype='float64'):
        self._check_parsed()
        return self._rescale_timestamp(self.header, np.asarray(spike_timestamps), dtype=dtype)

    def get_spike_raw_waveforms(self, t_start=None, t_stop=None):
        """
        Return waveforms as an int8 array of shape (nb_spikes, 4, 50).
        """
        self._check_parsed()
        mask = self._get_temporal_mask(t_start, t_stop)
        return self._waveforms[mask]

    def get_spike_times(self, t_start=None, t_stop=None):
        """
        Return spike times as a quantity array in seconds.
        """
        self._check_parsed()
        mask = self._get_temporal_mask(t_start, t_stop)
        return self._spike_times[mask] * pq.s

    @property
    def sampling_rate(self):
        """Waveform sampling rate from the header `sample_rate`, in Hz."""
        self._check_parsed()
        return self.header.require_rate('sample_rate', filename=self._source_name()) * pq.Hz

    def _get_temporal_mask(self, t_start, t_stop):
        times = self._spike_times
        mask = np.ones(times.shape, dtype=bool)
        if t_start is not None:
            mask &= times >= _to_seconds(t_start)
        if t_stop is not None:
            mask &= times <= _to_seconds(t_stop)
        return mask


def _to_seconds(t):
    # plain numbers are taken as seconds
    if isinstance(t, pq.Quantity):
        return float(t.rescale('s').magnitude)
    return float(t)
