'''Read Siemens twix raw data into BART cfl arrays

The driver lives in `twixread.convert.convert`; it is not re-exported here
so that `twixread.convert` stays the submodule.
'''

from .info import __version__
from .dims import Dim, Coordinate
from .meas import (TwixError, TwixIOError, FormatMismatchError,
                   siemens_meas_setup, read_adc, coordinate_from_counters)
from .convert import CoordinateBoundsError, copy_block
from .cfl import create_cfl, readcfl, writecfl
