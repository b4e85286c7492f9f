'''Logical dimensions of the output k-space array

The axis order follows the BART convention, so the arrays we write can be
handed straight to BART tools.
'''

from enum import IntEnum


class Dim(IntEnum):
    '''Index of each logical axis in a dims list or Coordinate'''
    READ = 0
    PHS1 = 1
    PHS2 = 2
    COIL = 3
    MAPS = 4
    TE = 5
    COEFF = 6
    COEFF2 = 7
    ITER = 8
    CSHIFT = 9
    TIME = 10
    TIME2 = 11
    LEVEL = 12
    SLICE = 13
    AVG = 14
    BATCH = 15


DIMS = len(Dim)
'''Total number of dimensions in every output array'''


def singleton_dims():
    '''Return a list of extents where every dimension has size one'''
    return [1] * DIMS


def dims_str(dims):
    '''Format extents or indices the same way for every log message'''
    return ' '.join('%d' % d for d in dims)


class Coordinate(tuple):
    '''Position of one acquisition along every logical dimension

    Immutable, so a new Coordinate is produced for each acquisition rather
    than updating a shared one in place. Axes can be accessed by `Dim`
    index or by their lower case name (e.g. `pos.phs1`).
    '''

    __slots__ = ()

    def __new__(klass, values=None):
        if values is None:
            values = (0,) * DIMS
        values = tuple(int(v) for v in values)
        if len(values) != DIMS:
            raise ValueError("Coordinate needs %d values, got %d"
                             % (DIMS, len(values)))
        return super(Coordinate, klass).__new__(klass, values)

    @classmethod
    def from_dims(klass, **kwargs):
        '''Create a Coordinate at the origin except for the given axes'''
        return klass().replace(**kwargs)

    def replace(self, **kwargs):
        '''Return a copy with the named axes set to new values'''
        values = list(self)
        for name, value in kwargs.items():
            try:
                dim = Dim[name.upper()]
            except KeyError:
                raise ValueError("Unknown dimension: %s" % name)
            values[dim] = value
        return Coordinate(values)

    def __getattr__(self, name):
        try:
            dim = Dim[name.upper()]
        except KeyError:
            raise AttributeError(name)
        return self[dim]

    def __repr__(self):
        named = ['%s=%d' % (dim.name.lower(), self[dim])
                 for dim in Dim if self[dim] != 0]
        return 'Coordinate(%s)' % ', '.join(named)
