'''Twix "meas" file parsing

Handles both the old (VB) and new (VD and later) layouts of the Siemens raw
data container. Each acquisition ("ADC") is one readout line for every
receive channel, and its position in k-space is recovered from the loop
counters in the measurement data header (MDH).

Everything in the file is little-endian: headers are unpacked with explicit
`<` formats and samples are read as `<c8` (float32 real/imaginary pairs),
then swapped to host order if the host is big-endian.
'''

import struct
import logging
from collections import namedtuple

import numpy as np

from .dims import Dim, Coordinate


logger = logging.getLogger(__name__)


class TwixError(Exception):
    '''Base class for errors raised while converting a twix file'''


class TwixIOError(TwixError, IOError):
    '''Raised on a short read or a failed seek in the source file'''


class FormatMismatchError(TwixError, ValueError):
    '''Raised when the file does not match the configured dimensions'''


def _read_exact(src_file, size):
    '''Read exactly `size` bytes from `src_file`'''
    data = src_file.read(size)
    if len(data) != size:
        raise TwixIOError("reading file: wanted %d bytes, got %d"
                          % (size, len(data)))
    return data


SAMPLE_DTYPE = np.dtype('<c8')
'''On disk type of the samples'''


def _read_samples(src_file, arr):
    '''Fill the contiguous complex64 array `arr` with samples from `src_file`'''
    raw = arr.view(np.uint8)
    n_read = src_file.readinto(raw)
    if n_read != raw.nbytes:
        raise TwixIOError("reading file: wanted %d bytes, got %d"
                          % (raw.nbytes, n_read or 0))
    if not SAMPLE_DTYPE.isnative:
        arr.byteswap(inplace=True)


def _seek(src_file, pos):
    try:
        src_file.seek(pos)
    except (OSError, ValueError, OverflowError) as e:
        raise TwixIOError("seeking to %d: %s" % (pos, e))


class HeaderElemSpec(object):
    '''Describes a single element in a structured binary header'''
    def __init__(self, struct_char, n_elems=1):
        self.struct_char = struct_char
        self.n_elems = n_elems

    def get_struct_fmt_str(self):
        if self.n_elems == 1:
            return self.struct_char
        else:
            return "%d%s" % (self.n_elems, self.struct_char)


def get_struct_fmt(hdr_class, elem_specs):
    '''Get the format string to pass to struct.unpack/pack for this header'''
    struct_fmt = ['<']
    for field in hdr_class._fields:
        spec = elem_specs[field]
        struct_fmt.append(spec.get_struct_fmt_str())
    return ''.join(struct_fmt)


def make_hdr(hdr_class, elem_specs, raw_elems):
    '''Convert result from struct.unpack into the hdr_class'''
    args = []
    struct_idx = 0
    for field in hdr_class._fields:
        spec = elem_specs[field]
        n_elems = spec.n_elems
        if n_elems == 1:
            args.append(raw_elems[struct_idx])
        else:
            args.append(tuple(raw_elems[struct_idx:struct_idx+n_elems]))
        struct_idx += n_elems
    return hdr_class(*args)


container_elem_specs = {'offset' : HeaderElemSpec('I'),
                        'n_scans' : HeaderElemSpec('I'),
                        'meas_id' : HeaderElemSpec('I'),
                        'file_id' : HeaderElemSpec('I'),
                        'dat_offset' : HeaderElemSpec('Q'),
                       }
'''Specs for the leading file header'''


ContainerHeader = namedtuple('ContainerHeader',
                             '''
                             offset
                             n_scans
                             meas_id
                             file_id
                             dat_offset
                             ''')
'''Named tuple for the header at the very start of the file

For VB files `offset` is the length of the measurement header and the other
fields are meaningless. For VD files this overlaps the multi-raid header,
where `dat_offset` is the start of the first measurement.
'''


CONTAINER_HDR_FMT = get_struct_fmt(ContainerHeader, container_elem_specs)

CONTAINER_HDR_SIZE = struct.calcsize(CONTAINER_HDR_FMT)


counter_elem_specs = {'eval_info' : HeaderElemSpec('I', 2),
                      'samples' : HeaderElemSpec('H'),
                      'channels' : HeaderElemSpec('H'),
                      'loop_counters' : HeaderElemSpec('H', 14),
                      'dummy1' : HeaderElemSpec('H', 2),
                      'column_center' : HeaderElemSpec('H'),
                      'dummy2' : HeaderElemSpec('H', 5),
                      'line_counter' : HeaderElemSpec('H'),
                      'partition_counter' : HeaderElemSpec('H'),
                     }
'''Specs for the loop counter part of the MDH'''


LoopCounterRecord = namedtuple('LoopCounterRecord',
                               '''
                               eval_info
                               samples
                               channels
                               loop_counters
                               dummy1
                               column_center
                               dummy2
                               line_counter
                               partition_counter
                               ''')
'''Named tuple for the part of the MDH holding sizes and loop counters'''


LOOP_COUNTER_FMT = get_struct_fmt(LoopCounterRecord, counter_elem_specs)

LOOP_COUNTER_SIZE = struct.calcsize(LOOP_COUNTER_FMT)


VD_MAX_OFFSET = 10000

VD_MAX_SCANS = 64


def siemens_meas_setup(src_file):
    '''Figure out the file version and seek to the first acquisition

    Returns a tuple `(vd, hdr)` where `vd` is True for the new (VD) layout
    and `hdr` is the `ContainerHeader` with `offset` and `n_scans` updated
    for the detected version.
    '''
    start = 0
    _seek(src_file, start)
    hdr = make_hdr(ContainerHeader,
                   container_elem_specs,
                   struct.unpack(CONTAINER_HDR_FMT,
                                 _read_exact(src_file, CONTAINER_HDR_SIZE)))

    # Lazy version check, VB files start with the (large) header length
    vd = hdr.offset < VD_MAX_OFFSET and hdr.n_scans < VD_MAX_SCANS

    if vd:
        logger.info("VD Header. MeasID: %d FileID: %d Scans: %d",
                    hdr.meas_id, hdr.file_id, hdr.n_scans)
        start += hdr.dat_offset
        _seek(src_file, start)
        # The measurement has its own header length
        (offset,) = struct.unpack('<I', _read_exact(src_file, 4))
        hdr = hdr._replace(offset=offset)
    else:
        logger.info("VB Header.")
        hdr = hdr._replace(n_scans=1)

    start += hdr.offset
    _seek(src_file, start)
    return vd, hdr


class LayoutVB(object):
    '''MDH layout for pre-VD software versions

    There is no separate scan header, every channel has a full 128 byte
    header that includes the loop counters.
    '''

    SCAN_HDR_SIZE = 0

    CHAN_HDR_SIZE = 128

    COUNTER_OFFSET = 20

    @classmethod
    def read_scan_hdr(klass, src_file):
        if klass.SCAN_HDR_SIZE == 0:
            return b''
        return _read_exact(src_file, klass.SCAN_HDR_SIZE)

    @classmethod
    def read_chan_hdr(klass, src_file):
        return _read_exact(src_file, klass.CHAN_HDR_SIZE)

    @classmethod
    def counter_block(klass, scan_hdr, chan_hdr):
        '''The raw block holding the loop counters'''
        return chan_hdr

    @classmethod
    def read_loop_counters(klass, scan_hdr, chan_hdr):
        '''Parse the `LoopCounterRecord` out of the raw header blocks'''
        block = klass.counter_block(scan_hdr, chan_hdr)
        if klass.COUNTER_OFFSET + LOOP_COUNTER_SIZE > len(block):
            raise FormatMismatchError("Header block of %d bytes too short for "
                                      "loop counters at offset %d"
                                      % (len(block), klass.COUNTER_OFFSET))
        return make_hdr(LoopCounterRecord,
                        counter_elem_specs,
                        struct.unpack_from(LOOP_COUNTER_FMT,
                                           block,
                                           klass.COUNTER_OFFSET))


class LayoutVD(LayoutVB):
    '''MDH layout for VD and later software versions

    A 192 byte scan header holds the loop counters and is followed by a
    short 32 byte header for each channel.
    '''

    SCAN_HDR_SIZE = 192

    CHAN_HDR_SIZE = 32

    COUNTER_OFFSET = 40

    @classmethod
    def counter_block(klass, scan_hdr, chan_hdr):
        return scan_hdr


def get_layout(vd):
    '''Get the layout class for the detected version'''
    return LayoutVD if vd else LayoutVB


counter_dims = ((0, Dim.PHS1),
                (2, Dim.SLICE),
                (3, Dim.PHS2),
                (4, Dim.TE),
                (6, Dim.TIME),
                (7, Dim.TIME2),
               )
'''Map loop counter indices to the output dimension they address'''


def coordinate_from_counters(record):
    '''Get the k-space position described by a `LoopCounterRecord`

    Dimensions that are not addressed by any loop counter are zero.
    '''
    values = [0] * len(Dim)
    for cntr_idx, dim in counter_dims:
        values[dim] = record.loop_counters[cntr_idx]
    return Coordinate(values)


def read_adc(vd, src_file, dims, buf):
    '''Read a single acquisition (all channels) into `buf`

    Parameters
    ----------
    vd : bool
        True if the file uses the VD layout

    src_file : file
        Source file positioned at the start of the acquisition

    dims : sequence of int
        Extents of the output array

    buf : array
        Complex64 array of shape (dims[READ], dims[COIL]) in Fortran order,
        so each channel is a contiguous column

    Returns
    -------
    pos : Coordinate
        Position of the acquisition, taken from the first channel. The
        channels are assumed to share the same loop counters.
    '''
    layout = get_layout(vd)
    n_samples = dims[Dim.READ]
    n_channels = dims[Dim.COIL]

    if buf.shape != (n_samples, n_channels) or buf.dtype != np.complex64:
        raise ValueError("Buffer must be complex64 of shape %s, got %s %s"
                         % ((n_samples, n_channels), buf.dtype, buf.shape))
    if not buf.flags['F_CONTIGUOUS']:
        raise ValueError("Buffer must be in Fortran order")

    scan_hdr = layout.read_scan_hdr(src_file)
    pos = None
    for chan_idx in range(n_channels):
        chan_hdr = layout.read_chan_hdr(src_file)
        record = layout.read_loop_counters(scan_hdr, chan_hdr)

        if chan_idx == 0:
            pos = coordinate_from_counters(record)

        if record.samples != n_samples:
            raise FormatMismatchError("wrong number of samples: %d != %d"
                                      % (record.samples, n_samples))
        if record.channels != n_channels:
            raise FormatMismatchError("wrong number of channels: %d != %d"
                                      % (record.channels, n_channels))

        _read_samples(src_file, buf[:, chan_idx])

    return pos
