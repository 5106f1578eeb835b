"""
Locate and write the tokens that wrap the binary payload of a DACQ file.

A DACQ file is laid out as::

    <header text>\\r\\ndata_start<binary payload>\\r\\ndata_end<trailer>

Neither token belongs to the header nor to the payload.
"""

from dacqio.core.errors import MissingSentinel

DATA_START_TOKEN = b'\r\ndata_start'
DATA_END_TOKEN = b'\r\ndata_end'


def locate(data, filename=None):
    """
    Find the payload boundaries in the raw bytes of a file.

    Parameters
    ----------
    data: bytes
        Full content of the file
    filename: str | Path | None, default: None
        Only used to give context to errors

    Returns
    -------
    header_end: int
        Offset of the start token; the header is ``data[:header_end]``
    payload_start: int
        Offset of the first payload byte, just after the start token
    payload_end: int
        Offset of the end token; the payload is
        ``data[payload_start:payload_end]``
    """
    data = bytes(data)

    header_end = data.find(DATA_START_TOKEN)
    if header_end == -1:
        raise MissingSentinel('No data_start token found', filename=filename)
    payload_start = header_end + len(DATA_START_TOKEN)

    payload_end = data.find(DATA_END_TOKEN)
    if payload_end == -1:
        raise MissingSentinel('No data_end token found', filename=filename,
                              offset=payload_start)
    if payload_end < payload_start:
        raise MissingSentinel('data_end token found before data_start token',
                              filename=filename, offset=payload_end)

    return header_end, payload_start, payload_end


def split(data, filename=None):
    """
    Return ``(header_bytes, payload_bytes)`` for the raw bytes of a file.
    """
    header_end, payload_start, payload_end = locate(data, filename=filename)
    return data[:header_end], data[payload_start:payload_end]


def emit(header_text, payload):
    """
    Join header and payload with the start and end tokens, without padding.

    `header_text` may be str (encoded as cp1252) or bytes.
    """
    if isinstance(header_text, str):
        header_text = header_text.encode('cp1252')
    return b''.join([header_text, DATA_START_TOKEN, bytes(payload), DATA_END_TOKEN])
