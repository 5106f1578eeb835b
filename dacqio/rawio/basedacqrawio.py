"""
basedacqrawio
=============

Classes
-------

BaseDacqRawIO
abstract class which should be overridden to write a RawIO for one DACQ
file type.

All DACQ files (tetrode, EEG, input) share the same layout: a text header
of 'key value' lines, then a binary payload wrapped by the `data_start` and
`data_end` tokens. The payload is a sequence of fixed width records whose
multi-byte fields are big-endian.

A RawIO reads the whole file in one pass when :meth:`parse_header` is called:
the tokens are located, the header is parsed into a
:class:`~dacqio.rawio.dacqheader.DacqHeader` and the payload is reshaped
into records by :meth:`_parse_payload`, which each subclass implements.
Nothing is kept open between calls.

"""

import logging
import pathlib

import numpy as np
import quantities as pq

from dacqio import logging_handler
from dacqio.core.errors import TruncatedPayload

from .dacqheader import DacqHeader
from . import sentinels

error_header = "Header is not read yet, do parse_header() first"


class BaseDacqRawIO:
    """
    Generic class to handle the common decoding path of DACQ files.

    Parameters
    ----------
    filename: str | Path | None, default: None
        The file to read. May be None when decoding bytes with :meth:`decode`
    host_byteorder: 'little' | 'big' | None, default: None
        Byte order of the arrays returned. None uses the machine order
    """

    name = "BaseDacqRawIO"
    description = ""
    extensions = []

    # width in bytes of one payload record, None if set by the header
    record_size = None
    # header entry giving the number of valid records, if any
    count_key = None

    def __init__(self, filename=None, host_byteorder=None):
        # create a logger for the IO class
        fullname = self.__class__.__module__ + "." + self.__class__.__name__
        self.logger = logging.getLogger(fullname)
        # Create a logger for 'dacqio' and add a handler to it if it doesn't have one already.
        # (it will also not add one if the root logger has a handler)
        corename = self.__class__.__module__.split(".")[0]
        corelogger = logging.getLogger(corename)
        rootlogger = logging.getLogger()
        if not corelogger.handlers and not rootlogger.handlers:
            corelogger.addHandler(logging_handler)

        self.filename = pathlib.Path(filename) if filename is not None else None
        self.host_byteorder = host_byteorder

        self.header = None
        self.is_header_parsed = False

    def __repr__(self):
        txt = f"{self.__class__.__name__}: {self.filename}\n"
        if self.is_header_parsed:
            txt += f"nb_records: {self.nb_records}\n"
        return txt

    def _source_name(self):
        return self.filename

    def parse_header(self):
        """
        Read the file and decode header and payload.
        """
        with open(self.filename, 'rb') as f:
            data = f.read()
        self.decode(data)

    def decode(self, data):
        """
        Decode the full content of a file given as bytes.
        """
        header_end, payload_start, payload_end = sentinels.locate(data, filename=self._source_name())
        self.logger.debug(f"payload spans bytes {payload_start}:{payload_end}")

        header = DacqHeader.from_text(bytes(data[:header_end]), filename=self._source_name())
        payload = bytes(data[payload_start:payload_end])

        record_size = self._get_record_size(header)
        if len(payload) % record_size != 0:
            raise TruncatedPayload(
                f"Payload of {len(payload)} bytes is not a multiple of the "
                f"{record_size} byte record size",
                filename=self._source_name(),
                offset=payload_end - len(payload) % record_size,
            )
        raw = np.frombuffer(payload, dtype='uint8').reshape(-1, record_size)
        raw = self._trim_padding(header, raw)

        # every record is decoded before the results are stored on self
        self._payload_offset = payload_start
        parsed = self._parse_payload(header, raw)

        self.header = header
        self.nb_records = raw.shape[0]
        for key, value in parsed.items():
            setattr(self, key, value)
        self.is_header_parsed = True

    def _get_record_size(self, header):
        return self.record_size

    def _trim_padding(self, header, raw):
        # records past the declared count are padding
        count_key = self._get_count_key(header)
        if count_key is None or count_key not in header:
            return raw
        count = header.require_int(count_key, filename=self._source_name())
        if raw.shape[0] > count:
            self.logger.warning(
                f"ignoring {raw.shape[0] - count} padding records after "
                f"{count_key}={count}"
            )
            return raw[:count]
        if raw.shape[0] < count:
            self.logger.warning(
                f"{count_key} is {count} but payload only holds {raw.shape[0]} records"
            )
        return raw

    def _get_count_key(self, header):
        return self.count_key

    def _parse_payload(self, header, raw):
        """
        Decode the (nb_records, record_size) uint8 array `raw`. Return a dict
        of attributes to set on self.
        """
        raise NotImplementedError

    def _check_parsed(self):
        if not self.is_header_parsed:
            raise RuntimeError(error_header)

    def _get_timebase(self, header):
        return header.require_rate('timebase', filename=self._source_name())

    @property
    def timebase(self):
        """Tick rate of the timestamps, as a quantity in Hz."""
        self._check_parsed()
        return self._get_timebase(self.header) * pq.Hz

    def _rescale_timestamp(self, header, ticks, dtype='float64'):
        times = ticks.astype(dtype)
        times /= self._get_timebase(header)
        return times

