"""
:mod:`dacqio.io` provides classes and functions for reading and writing
DACQ files.

Functions:

.. autofunction:: dacqio.io.read_tetrode
.. autofunction:: dacqio.io.write_tetrode
.. autofunction:: dacqio.io.read_eeg
.. autofunction:: dacqio.io.write_eeg
.. autofunction:: dacqio.io.read_input
.. autofunction:: dacqio.io.write_input
.. autofunction:: dacqio.io.get_io


Classes:

* :attr:`TetrodeIO`
* :attr:`EegIO`
* :attr:`InputIO`

.. autoclass:: dacqio.io.TetrodeIO

    .. autoattribute:: extensions

.. autoclass:: dacqio.io.EegIO

    .. autoattribute:: extensions

.. autoclass:: dacqio.io.InputIO

    .. autoattribute:: extensions

"""

import pathlib

from dacqio.io.tetrodeio import (TetrodeIO, read_tetrode, write_tetrode,
                                 decode_tetrode, encode_tetrode)
from dacqio.io.eegio import EegIO, read_eeg, write_eeg, decode_eeg, encode_eeg
from dacqio.io.inputio import (InputIO, read_input, write_input,
                               decode_input, encode_input)

iolist = [
    TetrodeIO,
    EegIO,
    InputIO,
]

# for each supported extension list the ios supporting it
io_by_extension = {}
for current_io in iolist:  # do not use `io` as variable name here as this overwrites the module io
    for extension in current_io.extensions:
        extension = extension.lower()
        # extension handling should not be case sensitive
        io_by_extension.setdefault(extension, []).append(current_io)


def list_candidate_ios(filename):
    """
    Return the IO classes associated with the extension of `filename`.
    The file does not need to exist.
    """
    suffix = pathlib.Path(filename).suffix[1:].lower()
    if suffix not in io_by_extension:
        raise ValueError(f'{suffix} is not a supported format of any IO.')
    return io_by_extension[suffix]


def get_io(filename, *args, **kwargs):
    """
    Return an IO instance for `filename`, guessing the type from its suffix.
    """
    ios = list_candidate_ios(filename)
    return ios[0](filename, *args, **kwargs)
