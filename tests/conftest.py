import struct

import numpy as np
import pytest


def pack_counters(samples, channels, counters=()):
    '''Pack a 60 byte loop counter record'''
    counters = list(counters) + [0] * (14 - len(counters))
    return struct.pack('<2I2H14H2HH5HHH',
                       0, 0,
                       samples, channels,
                       *(counters + [0, 0, 0, 0, 0, 0, 0, 0, 0, 0])
                      )


class TwixBuilder(object):
    '''Build a small synthetic twix file in either layout'''

    VB_HDR_LEN = 10240

    VD_DAT_OFFSET = 10240

    VD_MEAS_HDR_LEN = 2048

    pack_counters = staticmethod(pack_counters)

    def __init__(self, vd, samples, channels, sample_dtype='<c8'):
        self.vd = vd
        self.sample_dtype = sample_dtype
        self.samples = samples
        self.channels = channels
        self.adcs = []

    def add_adc(self, counters, data=None, samples=None, channels=None):
        '''Add an acquisition, `data` has shape (samples, channels)'''
        if samples is None:
            samples = self.samples
        if channels is None:
            channels = self.channels
        if data is None:
            data = np.zeros((samples, self.channels), dtype=np.complex64)
        data = np.asarray(data, dtype=np.complex64)
        self.adcs.append((counters, data, samples, channels))
        return data

    def _adc_bytes(self, counters, data, samples, channels):
        record = pack_counters(samples, channels, counters)
        chunks = []
        if self.vd:
            scan_hdr = bytearray(192)
            scan_hdr[40:40 + len(record)] = record
            chunks.append(bytes(scan_hdr))
        for chan_idx in range(data.shape[1]):
            if self.vd:
                chunks.append(bytes(32))
            else:
                chan_hdr = bytearray(128)
                chan_hdr[20:20 + len(record)] = record
                chunks.append(bytes(chan_hdr))
            chunks.append(data[:, chan_idx].astype(self.sample_dtype).tobytes())
        return b''.join(chunks)

    def to_bytes(self):
        if self.vd:
            head = struct.pack('<4IQ', 0, 1, 1234, 5678, self.VD_DAT_OFFSET)
            head += bytes(self.VD_DAT_OFFSET - len(head))
            meas_hdr = struct.pack('<I', self.VD_MEAS_HDR_LEN)
            meas_hdr += bytes(self.VD_MEAS_HDR_LEN - len(meas_hdr))
            head += meas_hdr
        else:
            head = struct.pack('<4IQ', self.VB_HDR_LEN, 0, 0, 0, 0)
            head += bytes(self.VB_HDR_LEN - len(head))
        return head + b''.join(self._adc_bytes(*adc) for adc in self.adcs)

    def write(self, path):
        with open(str(path), 'wb') as f:
            f.write(self.to_bytes())
        return path


def random_adc(rng, samples, channels):
    real = rng.standard_normal((samples, channels))
    imag = rng.standard_normal((samples, channels))
    return (real + 1j * imag).astype(np.complex64)


@pytest.fixture
def rng():
    return np.random.RandomState(42)


@pytest.fixture
def twix_builder():
    return TwixBuilder


@pytest.fixture
def make_adc(rng):
    def _make_adc(samples, channels):
        return random_adc(rng, samples, channels)
    return _make_adc
