'''
This module defines :class:`SpikeRecord` and :class:`EventRecord`, the
per-record views of decoded tetrode and input files, and
:class:`EventKind`, the kind of an input event.

Records are created fresh by each read and are not tied to the file
they came from.
'''

import enum

import numpy as np
import quantities as pq


class EventKind(enum.Enum):
    '''
    Kind of a digital input file event, valued by its on-disk type code.

    *Usage*::
        >>> EventKind.from_code(b'K')
        <EventKind.KeyPress: b'K'>
    '''

    DigitalInput = b'I'
    DigitalOutput = b'O'
    KeyPress = b'K'

    @classmethod
    def from_code(cls, code):
        '''
        Return the kind for a type code given as a one byte ``bytes`` or an
        int. Raises ValueError for unknown codes.
        '''
        if isinstance(code, (int, np.integer)):
            code = bytes([int(code)])
        return cls(code)

    @property
    def code(self):
        return self.value[0]

    @property
    def has_channel_state(self):
        return self is not EventKind.KeyPress


class SpikeRecord:
    '''
    A single tetrode spike.

    *Usage*::
        >>> import numpy as np
        >>> spk = SpikeRecord(1.5, np.zeros((4, 50), dtype='int8'))
        >>> spk.time
        array(1.5) * s

    *Required attributes/properties*:
        :timestamp: (float) Time of the spike in seconds.
        :waveforms: (numpy int8 array (4, 50)) One waveform per tetrode
            channel, in channel order.

    *Properties available on this object*:
        :time: (quantity scalar) :attr:`timestamp` in seconds.
        :num_channels: (int) Number of channels, always 4.
    '''

    def __init__(self, timestamp, waveforms):
        self.timestamp = float(timestamp)
        self.waveforms = np.asarray(waveforms, dtype='int8')

    @property
    def time(self):
        return self.timestamp * pq.s

    @property
    def num_channels(self):
        return self.waveforms.shape[0]

    def __eq__(self, other):
        if not isinstance(other, SpikeRecord):
            return NotImplemented
        return (self.timestamp == other.timestamp
                and np.array_equal(self.waveforms, other.waveforms))

    # waveforms are a mutable array
    __hash__ = None

    def __repr__(self):
        return f'<SpikeRecord t={self.timestamp!r}s>'


class EventRecord:
    '''
    A single digital input, digital output or keypress event.

    *Required attributes/properties*:
        :timestamp: (float) Time of the event in seconds.
        :kind: (:class:`EventKind`) What happened.
        :channel_state: (int) 16-bit state of the digital channels. Only
            meaningful for digital input and output, always 0 for a key
            press.
    '''

    def __init__(self, timestamp, kind, channel_state=0):
        self.timestamp = float(timestamp)
        self.kind = EventKind(kind)
        if self.kind.has_channel_state:
            self.channel_state = int(channel_state)
        else:
            self.channel_state = 0

    @property
    def time(self):
        return self.timestamp * pq.s

    def __eq__(self, other):
        if not isinstance(other, EventRecord):
            return NotImplemented
        return ((self.timestamp, self.kind, self.channel_state)
                == (other.timestamp, other.kind, other.channel_state))

    def __hash__(self):
        return hash((self.timestamp, self.kind, self.channel_state))

    def __repr__(self):
        return (f'<EventRecord t={self.timestamp!r}s {self.kind.name} '
                f'state={self.channel_state}>')
