"""
Helpers building synthetic DACQ files for the tests, written byte by byte
so they do not depend on the encoders under test.
"""

import numpy as np

DATA_START = b'\r\ndata_start'
DATA_END = b'\r\ndata_end'

TETRODE_HEADER_LINES = [
    'trial_date Friday, 15 Aug 2014',
    'trial_time 18:01:28',
    'experimenter sb',
    'comments unit mode',
    'duration 180',
    'sw_version 1.2.2.14',
    'num_chans 4',
    'timebase 96000 hz',
    'bytes_per_timestamp 4',
    'samples_per_spike 50',
    'sample_rate 48000 hz',
    'bytes_per_sample 1',
    'spike_format t,ch1,t,ch2,t,ch3,t,ch4',
]


def header_bytes(lines):
    return '\r\n'.join(lines).encode('cp1252')


def tetrode_file(ticks, waveforms, num_spikes=None, padding=0, extra_lines=(),
                 timestamp_copies=None):
    """
    Build a tetrode file. `timestamp_copies` optionally gives the ticks
    written before channels 2-4 as an (nb_spikes, 3) array.
    """
    ticks = np.asarray(ticks, dtype='int64')
    waveforms = np.asarray(waveforms, dtype='int8')
    nb_spikes = ticks.size
    if num_spikes is None:
        num_spikes = nb_spikes
    lines = TETRODE_HEADER_LINES + [f'num_spikes {num_spikes}'] + list(extra_lines)

    payload = b''
    for i in range(nb_spikes):
        for ch in range(4):
            tick = ticks[i] if ch == 0 or timestamp_copies is None else timestamp_copies[i][ch - 1]
            payload += int(tick).to_bytes(4, 'big', signed=True)
            payload += waveforms[i, ch].tobytes()
    payload += b'\x00' * 216 * padding
    return header_bytes(lines) + DATA_START + payload + DATA_END + b'\r\n'


def eeg_file(samples, bytes_per_sample=1, sample_rate='250.0 hz', extra_lines=(), padding=0):
    samples = [int(s) for s in samples]
    lines = [
        'trial_date Friday, 15 Aug 2014',
        'trial_time 18:01:28',
        f'sample_rate {sample_rate}',
        'EEG_samples_per_position 5',
        f'bytes_per_sample {bytes_per_sample}',
    ] + list(extra_lines)
    payload = b''.join(s.to_bytes(bytes_per_sample, 'big', signed=True) for s in samples)
    payload += b'\x00' * bytes_per_sample * padding
    return header_bytes(lines) + DATA_START + payload + DATA_END + b'\r\n'


def input_file(records, extra_lines=()):
    """
    Build an .inp file from (ticks, type_byte, state) tuples.
    """
    lines = [
        'trial_date Friday, 15 Aug 2014',
        'trial_time 18:01:28',
        'timebase 96000 hz',
        'bytes_per_timestamp 4',
        'data_format t,type,value',
        'bytes_per_type 1',
        'bytes_per_value 2',
    ] + list(extra_lines)
    payload = b''
    for tick, type_byte, state in records:
        payload += int(tick).to_bytes(4, 'big', signed=True)
        payload += bytes([type_byte])
        payload += int(state).to_bytes(2, 'big', signed=True)
    return header_bytes(lines) + DATA_START + payload + DATA_END + b'\r\n'


def random_waveforms(nb_spikes, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(-128, 128, size=(nb_spikes, 4, 50), dtype='int8')
