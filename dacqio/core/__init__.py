"""
:mod:`dacqio.core` provides the small data objects and the error classes
shared by :mod:`dacqio.rawio` and :mod:`dacqio.io`.

Classes:

.. autoclass:: SpikeRecord
.. autoclass:: EventRecord
.. autoclass:: EventKind

"""

from dacqio.core.errors import (
    DacqReadWriteError,
    MalformedHeader,
    MissingSentinel,
    TruncatedPayload,
    UnsupportedSampleWidth,
    UnknownEventType,
    OverwriteRefused,
    InvalidRecordData,
)
from dacqio.core.records import EventKind, SpikeRecord, EventRecord
