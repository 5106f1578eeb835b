"""
This class reads continuous EEG files (.eeg, .eg2, ... and .egf) from the
Axona dacqUSB system.

EEG data is usually recorded continuously at 250 Hz in unit recording mode.
The .eeg and .eg2 files hold the primary and secondary EEG channels, one
byte per sample. The .egf file is stored when a higher sample rate is
selected, normally 4800 Hz with 2 bytes per sample. The sample width comes
from the header `bytes_per_sample`; 2 byte samples are big-endian.

Samples are returned as float64 in raw ADC units, no gain is applied.

"""

import numpy as np
import quantities as pq

from dacqio.core.errors import UnsupportedSampleWidth

from .basedacqrawio import BaseDacqRawIO
from . import endian


class EegRawIO(BaseDacqRawIO):
    """
    Class for reading samples from a dacqUSB EEG or EGF file.

    Usage::

        import dacqio.rawio
        r = dacqio.rawio.EegRawIO(filename='20140815-180secs.eeg')
        r.parse_header()
        samples = r.get_analogsignal_chunk(i_start=0, i_stop=1024)
        r.sampling_rate  # array(250.) * Hz

    """

    name = "EegRawIO"
    description = "Continuous samples from dacqUSB .eeg/.egf files"
    extensions = (['eeg', 'eg2', 'egf']
                  + [f'eeg{i}' for i in range(2, 17)]
                  + [f'egf{i}' for i in range(2, 17)])

    # bytes_per_sample -> sample dtype
    sample_dtypes = {1: 'i1', 2: 'i2'}
    count_keys = ('num_EEG_samples', 'num_EGF_samples')

    def _get_record_size(self, header):
        width = header.require_int('bytes_per_sample', filename=self._source_name())
        if width not in self.sample_dtypes:
            raise UnsupportedSampleWidth(
                f"bytes_per_sample must be 1 or 2, not {width}", filename=self._source_name()
            )
        return width

    def _get_count_key(self, header):
        for key in self.count_keys:
            if key in header:
                return key
        return None

    def _parse_payload(self, header, raw):
        width = raw.shape[1]
        if width == 1:
            samples = endian.to_host_int8(raw.tobytes(), host_byteorder=self.host_byteorder)
        else:
            samples = endian.to_host_int16(raw.tobytes(), host_byteorder=self.host_byteorder)

        self.logger.debug(f"decoded {samples.size} samples of {width} byte(s)")
        return {
            '_raw_samples': samples,
            'bytes_per_sample': width,
        }

    def get_signal_size(self):
        self._check_parsed()
        return self._raw_samples.size

    def get_analogsignal_chunk(self, i_start=None, i_stop=None, dtype='float64'):
        """
        Return samples[i_start:i_stop] converted to `dtype`, without scaling.
        """
        self._check_parsed()
        return self._raw_samples[i_start:i_stop].astype(dtype)

    def get_raw_samples(self):
        """Return the samples as int8 or int16 in host byte order."""
        self._check_parsed()
        return self._raw_samples

    @property
    def sampling_rate(self):
        self._check_parsed()
        return self.header.require_rate('sample_rate', filename=self._source_name()) * pq.Hz

    @property
    def duration(self):
        return (self.get_signal_size() / self.sampling_rate).rescale('s')
