"""
:mod:`dacqio.rawio` provides classes for decoding DACQ files with a
low-level API returning numpy arrays.

:attr:`dacqio.rawio.rawiolist` provides a list of the rawio classes.

Functions:

.. autofunction:: dacqio.rawio.get_rawio


Classes:

* :attr:`TetrodeRawIO`
* :attr:`EegRawIO`
* :attr:`InputRawIO`
* :attr:`DacqHeader`


.. autoclass:: dacqio.rawio.TetrodeRawIO

    .. autoattribute:: extensions

.. autoclass:: dacqio.rawio.EegRawIO

    .. autoattribute:: extensions

.. autoclass:: dacqio.rawio.InputRawIO

    .. autoattribute:: extensions

"""

from pathlib import Path

from dacqio.rawio.dacqheader import DacqHeader, parse_header, serialize_header
from dacqio.rawio.tetroderawio import TetrodeRawIO
from dacqio.rawio.eegrawio import EegRawIO
from dacqio.rawio.inputrawio import InputRawIO

rawiolist = [
    TetrodeRawIO,
    EegRawIO,
    InputRawIO,
]


def get_rawio(filename):
    """
    Return a dacqio.rawio class guess from file extension, or None.

    Parameters
    ----------
    filename : str | Path
        The file to check. It does not need to exist.
    """
    ext = Path(filename).suffix[1:].lower()
    for rawio in rawiolist:
        if ext in rawio.extensions:
            return rawio
    return None
