"""
Byte order conversion between DACQ files and the host.

Multi-byte integers are always big-endian on disk. The functions here turn
file bytes into arrays laid out in the host's native order and back. The
host order is a parameter (``'little'`` or ``'big'``, default
``sys.byteorder``) so both cases can be exercised on any machine: on a
little-endian host bytes are swapped, on a big-endian host they pass
through. Single byte values are order independent.
"""

import sys

import numpy as np

_order_chars = {'little': '<', 'big': '>'}

FILE_BYTEORDER = 'big'


def host_dtype(base, host_byteorder=None):
    """
    Return the numpy dtype `base` ('i1', 'i2', 'i4', ...) in host byte order.
    """
    if host_byteorder is None:
        host_byteorder = sys.byteorder
    if host_byteorder not in _order_chars:
        raise ValueError(f"host_byteorder must be 'little' or 'big', not {host_byteorder!r}")
    return np.dtype(base).newbyteorder(_order_chars[host_byteorder])


def file_dtype(base):
    return np.dtype(base).newbyteorder(_order_chars[FILE_BYTEORDER])


def to_host(raw, base, host_byteorder=None):
    """
    Convert big-endian file bytes to an array of `base` integers in host
    byte order. `raw` length must be a multiple of the item size.
    """
    values = np.frombuffer(bytes(raw), dtype=file_dtype(base))
    return values.astype(host_dtype(base, host_byteorder))


def to_file(values, base):
    """
    Convert integers to their big-endian on-disk bytes.
    """
    return np.asarray(values).astype(file_dtype(base)).tobytes()


def to_host_int32(raw, host_byteorder=None):
    return to_host(raw, 'i4', host_byteorder=host_byteorder)


def to_file_int32(values):
    return to_file(values, 'i4')


def to_host_int16(raw, host_byteorder=None):
    return to_host(raw, 'i2', host_byteorder=host_byteorder)


def to_file_int16(values):
    return to_file(values, 'i2')


def to_host_int8(raw, host_byteorder=None):
    # single bytes have no order
    return np.frombuffer(bytes(raw), dtype='i1').copy()


def to_file_int8(values):
    return np.asarray(values).astype('i1').tobytes()
