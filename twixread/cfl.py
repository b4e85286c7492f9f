'''BART "cfl" array storage

An array is stored as a pair of files: `<name>.hdr` holding the extents as
text and `<name>.cfl` holding the complex64 payload in column-major order.
'''

import os

import numpy as np

from .dims import DIMS


CFL_DTYPE = np.dtype(np.complex64)


def _base_name(name):
    '''Strip a ".cfl" or ".hdr" suffix if one was given'''
    name = os.fspath(name)
    root, ext = os.path.splitext(name)
    if ext in ('.cfl', '.hdr'):
        return root
    return name


def _pad_dims(dims):
    dims = [int(d) for d in dims]
    if len(dims) > DIMS:
        raise ValueError("Too many dimensions: %d > %d" % (len(dims), DIMS))
    if any(d < 1 for d in dims):
        raise ValueError("Invalid dimensions: %s" % (dims,))
    return dims + [1] * (DIMS - len(dims))


def write_hdr(name, dims):
    '''Write the text header describing an array with the given `dims`'''
    with open(_base_name(name) + '.hdr', 'w') as hdr_file:
        hdr_file.write('# Dimensions\n')
        hdr_file.write(' '.join('%d' % d for d in dims) + '\n')


def read_hdr(name):
    '''Read the extents stored in the header for `name`'''
    hdr_path = _base_name(name) + '.hdr'
    with open(hdr_path, 'r') as hdr_file:
        lines = hdr_file.read().splitlines()
    for idx, line in enumerate(lines):
        if line.strip() == '# Dimensions':
            break
    else:
        raise ValueError("No dimensions found in %s" % hdr_path)
    if idx + 1 >= len(lines):
        raise ValueError("Malformed header %s" % hdr_path)
    try:
        return [int(d) for d in lines[idx + 1].split()]
    except ValueError:
        raise ValueError("Malformed header %s" % hdr_path)


def create_cfl(name, dims):
    '''Create a zero filled, file backed array with the given extents

    The header is written immediately and the returned `numpy.memmap` is
    backed by the payload file, so writes to it end up on disk once the
    array is flushed (or released).
    '''
    dims = _pad_dims(dims)
    base = _base_name(name)
    write_hdr(base, dims)
    return np.memmap(base + '.cfl', dtype=CFL_DTYPE, mode='w+',
                     shape=tuple(dims), order='F')


def unmap_cfl(arr):
    '''Flush a file backed array created by `create_cfl`

    The mapping itself is released once the last reference to `arr` (or a
    view of it) goes away.
    '''
    arr.flush()


def readcfl(name):
    '''Map an existing cfl array (read only)'''
    base = _base_name(name)
    dims = read_hdr(base)
    n_elems = int(np.prod(dims))
    cfl_path = base + '.cfl'
    size = os.path.getsize(cfl_path)
    if size != n_elems * CFL_DTYPE.itemsize:
        raise ValueError("Size of %s (%d bytes) does not match dims %s"
                         % (cfl_path, size, dims))
    return np.memmap(cfl_path, dtype=CFL_DTYPE, mode='r',
                     shape=tuple(dims), order='F')


def writecfl(name, arr):
    '''Write a whole array to a cfl pair'''
    arr = np.asarray(arr)
    out = create_cfl(name, arr.shape)
    try:
        out[...] = arr.reshape(out.shape, order='F')
    finally:
        unmap_cfl(out)
