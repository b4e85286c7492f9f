'''Command line interface: twixread [options] <dat file> <output>'''

import sys
import logging
import argparse

from .info import __version__
from .dims import Dim, singleton_dims
from .meas import TwixError
from .convert import convert


logger = logging.getLogger(__name__)


HELP = '''\
Read data from Siemens twix (.dat) files.

The output is a BART cfl/hdr pair with the readout, phase encoding,
partition, coil and slice extents given by the options below. Echo and time
indices are taken from the loop counters of each acquisition.
'''


class UsageParser(argparse.ArgumentParser):
    '''Argument parser that exits with status 1 on usage errors'''

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, '%s: error: %s\n' % (self.prog, message))


def positive_int(value):
    ivalue = int(value)
    if ivalue < 1:
        raise argparse.ArgumentTypeError("must be positive: %s" % value)
    return ivalue


def non_negative_int(value):
    ivalue = int(value)
    if ivalue < 0:
        raise argparse.ArgumentTypeError("must not be negative: %s" % value)
    return ivalue


def build_parser():
    parser = UsageParser(prog='twixread',
                         description=HELP,
                         formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('-x', dest='read', metavar='X', type=positive_int,
                        default=1, help="number of samples (read-out)")
    parser.add_argument('-y', dest='phs1', metavar='Y', type=positive_int,
                        default=1, help="phase encoding steps")
    parser.add_argument('-z', dest='phs2', metavar='Z', type=positive_int,
                        default=1, help="partition encoding steps")
    parser.add_argument('-s', dest='slice', metavar='S', type=positive_int,
                        default=1, help="number of slices")
    parser.add_argument('-c', dest='coil', metavar='C', type=positive_int,
                        default=1, help="number of channels")
    parser.add_argument('-a', dest='adcs', metavar='A', type=non_negative_int,
                        default=0,
                        help="total number of ADCs (default: Y * Z * S)")
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="more log output (repeat for debug output)")
    parser.add_argument('-V', '--version', action='version',
                        version='%(prog)s ' + __version__)
    parser.add_argument('dat_file', help="Siemens twix file to read")
    parser.add_argument('output', help="base name of the output cfl")
    return parser


def dims_from_args(args):
    '''Build the output extents from the parsed options'''
    dims = singleton_dims()
    dims[Dim.READ] = args.read
    dims[Dim.PHS1] = args.phs1
    dims[Dim.PHS2] = args.phs2
    dims[Dim.SLICE] = args.slice
    dims[Dim.COIL] = args.coil
    return dims


def setup_logging(verbosity):
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(format='%(levelname)s: %(message)s', level=level)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    dims = dims_from_args(args)
    try:
        n_adcs = convert(args.dat_file, args.output, dims, args.adcs)
    except (TwixError, OSError) as e:
        logger.error("%s: %s", args.dat_file, e)
        return 1
    logger.info("Converted %d ADCs into %s", n_adcs, args.output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
