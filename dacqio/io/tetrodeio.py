"""
Class for reading and writing dacqUSB tetrode spike files.

Supported : Read/Write

On write every timestamp is stored four times, once before each channel's
waveform, as the acquisition software does. The header is written as given:
`num_spikes` is not recomputed and must match the data.

"""

import numpy as np

from dacqio.core.errors import InvalidRecordData
from dacqio.core.records import SpikeRecord
from dacqio.rawio.tetroderawio import TetrodeRawIO
from dacqio.rawio import endian

from .basedacqio import BaseDacqIO, check_integer_range, timestamps_to_ticks


class TetrodeIO(TetrodeRawIO, BaseDacqIO):
    """
    Class for reading/writing dacqUSB tetrode files.

    Usage::

        >>> from dacqio.io import TetrodeIO
        >>> r = TetrodeIO(filename='20140815-180secs.1')
        >>> header, timestamps, waveforms = r.read()
        >>> w = TetrodeIO(filename='sorted.1')
        >>> w.write(header, timestamps, waveforms, overwrite=False)

    """

    name = 'Tetrode IO'
    is_writable = True

    def __init__(self, filename=None, host_byteorder=None):
        TetrodeRawIO.__init__(self, filename=filename, host_byteorder=host_byteorder)

    def read(self):
        """
        Return ``(header, timestamps, waveforms)``: timestamps in seconds
        (float64, one per spike) and waveforms as int8 (nb_spikes, 4, 50).
        """
        self.parse_header()
        return self.header, self._spike_times, self._waveforms

    def read_spikes(self):
        """
        Return the spikes as a list of :class:`SpikeRecord`.
        """
        if not self.is_header_parsed:
            self.parse_header()
        return [SpikeRecord(t, wf) for t, wf in zip(self._spike_times, self._waveforms)]

    def _encode_payload(self, header, timestamps, waveforms):
        timebase = self._get_timebase(header)

        timestamps = np.asarray(timestamps)
        if timestamps.ndim == 2 and timestamps.shape[1] == self.num_channels:
            # one identical column per channel, keep the first
            timestamps = timestamps[:, 0]
        elif timestamps.ndim != 1:
            raise InvalidRecordData(
                f"timestamps must have shape (nb_spikes,) or (nb_spikes, 4), got {timestamps.shape}",
                filename=self._source_name(),
            )
        nb_spikes = timestamps.shape[0]

        waveforms = np.asarray(waveforms)
        expected_shape = (nb_spikes, self.num_channels, self.samples_per_spike)
        if waveforms.shape != expected_shape:
            raise InvalidRecordData(
                f"waveforms must have shape {expected_shape}, got {waveforms.shape}",
                filename=self._source_name(),
            )
        waveforms = check_integer_range(waveforms, 'int8', 'waveforms', filename=self._source_name())

        ticks = timestamps_to_ticks(timestamps, timebase, filename=self._source_name())

        if 'num_spikes' in header and header['num_spikes'] != nb_spikes:
            self.logger.warning(
                f"header num_spikes is {header['num_spikes']} but {nb_spikes} spikes are written"
            )

        ts_bytes = np.frombuffer(endian.to_file_int32(ticks), dtype='uint8')
        payload = np.empty((nb_spikes, self.num_channels, self.channel_block_size), dtype='uint8')
        payload[:, :, :self.timestamp_size] = ts_bytes.reshape(nb_spikes, 1, self.timestamp_size)
        payload[:, :, self.timestamp_size:] = waveforms.view('uint8')
        return payload.tobytes()


def decode_tetrode(data, host_byteorder=None):
    """
    Decode the bytes of a tetrode file. Return
    ``(header, timestamps, waveforms)``.
    """
    reader = TetrodeIO(host_byteorder=host_byteorder)
    reader.decode(data)
    return reader.header, reader._spike_times, reader._waveforms


def encode_tetrode(header, timestamps, waveforms):
    return TetrodeIO().encode(header, timestamps, waveforms)


def read_tetrode(filename, host_byteorder=None):
    """
    Read a tetrode file. Return ``(header, timestamps, waveforms)``.
    """
    return TetrodeIO(filename=filename, host_byteorder=host_byteorder).read()


def write_tetrode(filename, header, timestamps, waveforms, overwrite=True):
    """
    Write a tetrode file. Raises OverwriteRefused if `filename` exists and
    `overwrite` is False.
    """
    TetrodeIO(filename=filename).write(header, timestamps, waveforms, overwrite=overwrite)
