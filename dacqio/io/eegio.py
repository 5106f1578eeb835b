"""
Class for reading and writing dacqUSB continuous EEG/EGF files.

Supported : Read/Write

"""

import numpy as np

from dacqio.core.errors import UnsupportedSampleWidth
from dacqio.rawio.eegrawio import EegRawIO
from dacqio.rawio import endian

from .basedacqio import BaseDacqIO, check_integer_range


class EegIO(EegRawIO, BaseDacqIO):
    """
    Class for reading/writing dacqUSB .eeg and .egf files.

    Usage::

        >>> from dacqio.io import EegIO
        >>> header, samples = EegIO(filename='20140815-180secs.egf').read()

    """

    name = 'EEG IO'
    is_writable = True

    def __init__(self, filename=None, host_byteorder=None):
        EegRawIO.__init__(self, filename=filename, host_byteorder=host_byteorder)

    def read(self):
        """
        Return ``(header, samples)`` with samples as float64 in raw units.
        """
        self.parse_header()
        return self.header, self.get_analogsignal_chunk()

    def _encode_payload(self, header, samples):
        width = header.require_int('bytes_per_sample', filename=self._source_name())
        if width not in self.sample_dtypes:
            raise UnsupportedSampleWidth(
                f"bytes_per_sample must be 1 or 2, not {width}", filename=self._source_name()
            )
        samples = np.asarray(samples).ravel()
        samples = check_integer_range(samples, self.sample_dtypes[width], 'samples',
                                      filename=self._source_name())
        if width == 1:
            return endian.to_file_int8(samples)
        return endian.to_file_int16(samples)


def decode_eeg(data, host_byteorder=None):
    """
    Decode the bytes of an EEG file. Return ``(header, samples)``.
    """
    reader = EegIO(host_byteorder=host_byteorder)
    reader.decode(data)
    return reader.header, reader.get_analogsignal_chunk()


def encode_eeg(header, samples):
    return EegIO().encode(header, samples)


def read_eeg(filename, host_byteorder=None):
    """
    Read an EEG or EGF file. Return ``(header, samples)``.
    """
    return EegIO(filename=filename, host_byteorder=host_byteorder).read()


def write_eeg(filename, header, samples, overwrite=True):
    EegIO(filename=filename).write(header, samples, overwrite=overwrite)
