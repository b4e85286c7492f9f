'''Convert a twix file into a cfl k-space array'''

import logging

import numpy as np

from .dims import Dim, DIMS, dims_str
from .meas import TwixError, siemens_meas_setup, read_adc
from .cfl import create_cfl, unmap_cfl


logger = logging.getLogger(__name__)


class CoordinateBoundsError(TwixError, IndexError):
    '''Raised if an acquisition maps outside of the output array'''


def default_adcs(dims):
    '''Number of acquisitions expected when it was not given explicitly'''
    return dims[Dim.PHS1] * dims[Dim.PHS2] * dims[Dim.SLICE]


def alloc_adc_buffer(dims):
    '''Allocate the buffer holding one acquisition (readout x channels)'''
    return np.zeros((dims[Dim.READ], dims[Dim.COIL]),
                    dtype=np.complex64,
                    order='F')


def copy_block(out, pos, buf):
    '''Copy one acquisition into `out` at the position `pos`

    The readout and coil dimensions are taken whole from `buf`, every other
    dimension is fixed to the index in `pos`. An acquisition that lands on
    an already filled position overwrites it.
    '''
    for dim in Dim:
        if dim in (Dim.READ, Dim.COIL):
            continue
        if not 0 <= pos[dim] < out.shape[dim]:
            raise CoordinateBoundsError("%s index %d out of bounds for size %d"
                                        % (dim.name, pos[dim], out.shape[dim]))
    if buf.shape != (out.shape[Dim.READ], out.shape[Dim.COIL]):
        raise ValueError("Buffer shape %s does not match output %s"
                         % (buf.shape, out.shape))
    idx = tuple(slice(None) if dim in (Dim.READ, Dim.COIL) else pos[dim]
                for dim in Dim)
    out[idx] = buf


def convert(src, dst, dims, adcs=None):
    '''Read `adcs` acquisitions from the twix file `src` into the cfl `dst`

    Parameters
    ----------
    src : str or path
        The twix (.dat) file to read

    dst : str or path
        Base name for the output cfl/hdr pair

    dims : sequence of int
        Extents of the output array (see `twixread.dims.Dim`)

    adcs : int
        Number of acquisitions to read, defaults to the product of the phase
        encoding, partition and slice extents

    Returns the number of acquisitions that were converted.
    '''
    dims = [int(d) for d in dims]
    if len(dims) != DIMS:
        raise ValueError("Expected %d dimensions, got %d" % (DIMS, len(dims)))
    if not adcs:
        adcs = default_adcs(dims)

    logger.debug("Dimensions: %s", dims_str(dims))

    with open(src, 'rb') as src_file:
        vd, _ = siemens_meas_setup(src_file)
        out = create_cfl(dst, dims)
        try:
            buf = alloc_adc_buffer(dims)
            for adc_idx in range(adcs):
                pos = read_adc(vd, src_file, dims, buf)
                logger.debug("ADC %d: %s", adc_idx, dims_str(pos))
                copy_block(out, pos, buf)
        finally:
            unmap_cfl(out)
            del out

    return adcs
