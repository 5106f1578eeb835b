"""
This class reads digital input files (.inp) from the Axona dacqUSB system.

Each event is stored in 7 bytes: a big-endian int32 timestamp in ticks of
the header `timebase`, one byte giving the event type ('I' digital input,
'O' digital output, 'K' keypress) and a big-endian int16 holding the state
of the digital channels. The channel state is meaningless for keypresses
and reported as 0.

"""

import numpy as np

from dacqio.core.errors import UnknownEventType
from dacqio.core.records import EventKind

from .basedacqrawio import BaseDacqRawIO
from . import endian


class InputRawIO(BaseDacqRawIO):
    """
    Class for reading events from a dacqUSB .inp file.

    Usage::

        import dacqio.rawio
        r = dacqio.rawio.InputRawIO(filename='20140815-180secs.inp')
        r.parse_header()
        times = r.get_event_times()
        kinds = r.get_event_kinds()
        states = r.get_channel_states()

    """

    name = "InputRawIO"
    description = "Digital I/O and keypress events from dacqUSB .inp files"
    extensions = ['inp']

    record_size = 7
    count_key = 'num_inp_samples'

    def _parse_payload(self, header, raw):
        ticks = endian.to_host_int32(raw[:, 0:4].tobytes(), host_byteorder=self.host_byteorder)
        codes = raw[:, 4]

        kinds = []
        for i, code in enumerate(codes):
            try:
                kinds.append(EventKind.from_code(code))
            except ValueError:
                offset = self._payload_offset + i * self.record_size + 4
                raise UnknownEventType(
                    f"Unknown event type byte 0x{int(code):02X} in record {i}",
                    filename=self._source_name(),
                    offset=offset,
                ) from None

        states = endian.to_host_int16(raw[:, 5:7].tobytes(), host_byteorder=self.host_byteorder)
        is_keypress = np.array([kind is EventKind.KeyPress for kind in kinds], dtype=bool)
        states[is_keypress] = 0

        self.logger.debug(f"decoded {len(kinds)} events")
        return {
            '_event_ticks': ticks,
            '_event_times': self._rescale_timestamp(header, ticks),
            '_event_kinds': kinds,
            '_channel_states': states,
        }

    def event_count(self):
        self._check_parsed()
        return len(self._event_kinds)

    def get_event_timestamps(self):
        """Return event timestamps in ticks of the header `timebase`."""
        self._check_parsed()
        return self._event_ticks

    def get_event_times(self):
        """Return event times in seconds as float64."""
        self._check_parsed()
        return self._event_times

    def get_event_kinds(self):
        """Return a list of :class:`EventKind`, one per event."""
        self._check_parsed()
        return list(self._event_kinds)

    def get_event_codes(self):
        """Return the event type codes as a numpy array of 1-char strings."""
        self._check_parsed()
        return np.array([kind.value.decode('ascii') for kind in self._event_kinds], dtype='U1')

    def get_channel_states(self):
        """Return the int16 channel states, 0 for keypresses."""
        self._check_parsed()
        return self._channel_states
