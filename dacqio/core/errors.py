"""
Errors raised while reading or writing DACQ files.

Every error derives from :class:`DacqReadWriteError` and keeps the file
name and, where it makes sense, the byte offset at which the problem was
found, so a corrupt recording can be diagnosed from the message alone.
Failures to open or read a file are not wrapped: they surface as the
usual :class:`OSError` subclasses.
"""


class DacqReadWriteError(Exception):
    """
    Base class for all DACQ decoding and encoding errors.

    Parameters
    ----------
    message: str
        Description of the problem
    filename: str | Path | None, default: None
        File being read or written, if known
    offset: int | None, default: None
        Byte offset in the file where the problem was detected
    """

    def __init__(self, message, filename=None, offset=None):
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.offset = offset

    def __str__(self):
        # OSError subclasses would otherwise render their errno/filename form
        return self._format()

    def _format(self):
        txt = self.message
        if self.offset is not None:
            txt += f" (at byte {self.offset})"
        if self.filename is not None:
            txt += f" in file {self.filename}"
        return txt


class MalformedHeader(DacqReadWriteError, ValueError):
    """A header line could not be parsed, a key is repeated or missing."""


class MissingSentinel(DacqReadWriteError, ValueError):
    """The data_start/data_end tokens are absent or out of order."""


class TruncatedPayload(DacqReadWriteError, ValueError):
    """The payload length is not a multiple of the record width."""


class UnsupportedSampleWidth(DacqReadWriteError, ValueError):
    """The EEG header asks for a sample width other than 1 or 2 bytes."""


class UnknownEventType(MalformedHeader):
    """An input record carries a type byte other than I, O or K."""


class OverwriteRefused(DacqReadWriteError, FileExistsError):
    """The destination exists and overwriting was disabled."""


class InvalidRecordData(DacqReadWriteError, ValueError):
    """Data handed to an encoder has the wrong shape or is out of range."""
