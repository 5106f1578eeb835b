"""
Class for reading and writing dacqUSB digital input files (.inp).

Supported : Read/Write

"""

import numpy as np

from dacqio.core.errors import InvalidRecordData, UnknownEventType
from dacqio.core.records import EventKind, EventRecord
from dacqio.rawio.inputrawio import InputRawIO
from dacqio.rawio import endian

from .basedacqio import BaseDacqIO, check_integer_range, timestamps_to_ticks


class InputIO(InputRawIO, BaseDacqIO):
    """
    Class for reading/writing dacqUSB .inp files.

    Usage::

        >>> from dacqio.io import InputIO
        >>> header, timestamps, kinds, states = InputIO(filename='trial.inp').read()
        >>> events = InputIO(filename='trial.inp').read_events()

    """

    name = 'Input IO'
    is_writable = True

    def __init__(self, filename=None, host_byteorder=None):
        InputRawIO.__init__(self, filename=filename, host_byteorder=host_byteorder)

    def read(self):
        """
        Return ``(header, timestamps, event_kinds, channel_states)``.
        """
        self.parse_header()
        return self.header, self._event_times, list(self._event_kinds), self._channel_states

    def read_events(self):
        """
        Return the events as a list of :class:`EventRecord`.
        """
        if not self.is_header_parsed:
            self.parse_header()
        return [EventRecord(t, kind, state) for t, kind, state
                in zip(self._event_times, self._event_kinds, self._channel_states)]

    def _to_kind(self, event_type):
        if isinstance(event_type, EventKind):
            return event_type
        if isinstance(event_type, str):
            event_type = event_type.encode('ascii', errors='replace')
        try:
            return EventKind.from_code(event_type)
        except ValueError:
            raise UnknownEventType(f"Unknown event type {event_type!r}",
                                   filename=self._source_name()) from None

    def _encode_payload(self, header, timestamps, event_types, channel_states=None):
        timebase = self._get_timebase(header)
        ticks = timestamps_to_ticks(np.asarray(timestamps).ravel(), timebase,
                                    filename=self._source_name())
        nb_events = ticks.shape[0]

        kinds = [self._to_kind(e) for e in event_types]
        if len(kinds) != nb_events:
            raise InvalidRecordData(
                f"{nb_events} timestamps but {len(kinds)} event types",
                filename=self._source_name(),
            )

        if channel_states is None:
            channel_states = np.zeros(nb_events, dtype='int16')
        channel_states = check_integer_range(np.asarray(channel_states).ravel(), 'int16',
                                             'channel states', filename=self._source_name())
        if channel_states.shape[0] != nb_events:
            raise InvalidRecordData(
                f"{nb_events} timestamps but {channel_states.shape[0]} channel states",
                filename=self._source_name(),
            )

        payload = np.empty((nb_events, self.record_size), dtype='uint8')
        payload[:, 0:4] = np.frombuffer(endian.to_file_int32(ticks), dtype='uint8').reshape(-1, 4)
        payload[:, 4] = [kind.code for kind in kinds]
        payload[:, 5:7] = np.frombuffer(endian.to_file_int16(channel_states),
                                        dtype='uint8').reshape(-1, 2)
        return payload.tobytes()


def decode_input(data, host_byteorder=None):
    """
    Decode the bytes of an input file. Return
    ``(header, timestamps, event_kinds, channel_states)``.
    """
    reader = InputIO(host_byteorder=host_byteorder)
    reader.decode(data)
    return reader.header, reader._event_times, list(reader._event_kinds), reader._channel_states


def encode_input(header, timestamps, event_types, channel_states=None):
    return InputIO().encode(header, timestamps, event_types, channel_states)


def read_input(filename, host_byteorder=None):
    """
    Read an input file. Return
    ``(header, timestamps, event_kinds, channel_states)``.
    """
    return InputIO(filename=filename, host_byteorder=host_byteorder).read()


def write_input(filename, header, timestamps, event_types, channel_states=None, overwrite=True):
    InputIO(filename=filename).write(header, timestamps, event_types, channel_states,
                                     overwrite=overwrite)
