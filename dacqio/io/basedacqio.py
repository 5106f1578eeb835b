"""
basedacqio
==========

Classes
-------

BaseDacqIO  - mixin adding encoding and writing to a DACQ RawIO

An IO class inherits from its RawIO for reading and from BaseDacqIO for
writing::

    class TetrodeIO(TetrodeRawIO, BaseDacqIO):
        ...

Writing is all-or-nothing: the whole file is encoded in memory and every
check is done before the first byte reaches the disk. If writing itself
fails the partial file is removed; a file being overwritten is replaced
in one step by a complete copy, so it is never left truncated.
"""

import os
import pathlib
import shutil
import tempfile

import numpy as np

from dacqio.core.errors import InvalidRecordData, OverwriteRefused
from dacqio.rawio.dacqheader import DacqHeader
from dacqio.rawio import sentinels


class BaseDacqIO:
    """
    Generic class to handle the common encoding path of DACQ files.

    Subclasses implement :meth:`_encode_payload`, returning the payload
    bytes for the data given to :meth:`encode`.
    """

    is_writable = False

    def encode(self, header, *data):
        """
        Return the full file content for `header` and `data` as bytes.
        """
        if not self.is_writable:
            raise NotImplementedError(f"{self.__class__.__name__} can not write")
        header = as_header(header)
        payload = self._encode_payload(header, *data)
        return sentinels.emit(header.to_bytes(), payload)

    def _encode_payload(self, header, *data):
        raise NotImplementedError

    def write(self, header, *data, overwrite=True):
        """
        Encode and write to :attr:`filename`.

        Parameters
        ----------
        header: DacqHeader | dict
            Header entries, written in iteration order
        data:
            Format specific arrays, see :meth:`encode`
        overwrite: bool, default: True
            If False and the file exists, raise OverwriteRefused and leave
            the file untouched

        An existing file is only replaced once the new content is fully
        written next to it, so a failed write leaves it as it was.
        """
        path = pathlib.Path(self.filename)
        if not overwrite and path.exists():
            raise OverwriteRefused("Output file already exists", filename=path)

        content = self.encode(header, *data)

        if overwrite and path.exists():
            _replace_file(path, content)
        else:
            try:
                _create_file(path, content)
            except FileExistsError:
                if not overwrite:
                    raise OverwriteRefused("Output file already exists", filename=path) from None
                _replace_file(path, content)
        self.logger.debug(f"wrote {len(content)} bytes to {path}")


def _create_file(path, content):
    # 'xb' so that a file appearing after the exists() check is never clobbered
    f = open(path, 'xb')
    try:
        with f:
            f.write(content)
    except OSError:
        # the file was created here, remove the partial copy
        path.unlink(missing_ok=True)
        raise


def _replace_file(path, content):
    tmp = tempfile.NamedTemporaryFile(dir=path.parent, prefix=f'.{path.name}.',
                                      suffix='.tmp', delete=False)
    tmp_path = pathlib.Path(tmp.name)
    try:
        with tmp:
            tmp.write(content)
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def as_header(header):
    if isinstance(header, DacqHeader):
        return header
    return DacqHeader(header)


def check_integer_range(values, dtype, name, filename=None):
    """
    Return `values` as an array of `dtype` after checking every value is a
    whole number representable in it.
    """
    values = np.asarray(values)
    info = np.iinfo(dtype)
    if values.size:
        if not np.issubdtype(values.dtype, np.integer):
            if not np.all(np.isfinite(values)) or np.any(values != np.round(values)):
                raise InvalidRecordData(f"{name} must hold whole numbers", filename=filename)
        if values.min() < info.min or values.max() > info.max:
            raise InvalidRecordData(
                f"{name} must lie in [{info.min}, {info.max}], got "
                f"[{values.min()}, {values.max()}]",
                filename=filename,
            )
    return values.astype(dtype)


def timestamps_to_ticks(timestamps, timebase, filename=None):
    """
    Convert seconds to int32 ticks of `timebase`, rounding to the nearest
    tick. Half ticks round away from zero.
    """
    timestamps = np.asarray(timestamps, dtype='float64')
    if not np.all(np.isfinite(timestamps)):
        raise InvalidRecordData("timestamps must be finite", filename=filename)
    ticks = timestamps * timebase
    ticks = np.sign(ticks) * np.floor(np.abs(ticks) + 0.5)
    return check_integer_range(ticks, 'int32', 'timestamp ticks', filename=filename)
