import numpy as np
import pytest

from twixread.cfl import readcfl
from twixread.cli import main, build_parser, dims_from_args
from twixread.dims import Dim


def test_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(['-h'])
    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert 'usage:' in out
    assert 'Siemens twix' in out


@pytest.mark.parametrize('argv', [[],
                                  ['meas.dat'],
                                  ['meas.dat', 'out', 'extra'],
                                  ['-x', 'abc', 'meas.dat', 'out'],
                                  ['-x', '0', 'meas.dat', 'out'],
                                  ['-a', '-1', 'meas.dat', 'out'],
                                  ['-q', 'meas.dat', 'out']])
def test_usage_errors(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 1
    assert 'usage:' in capsys.readouterr().err


def test_dims_from_args():
    args = build_parser().parse_args(['-x', '128', '-y', '64', '-z', '8',
                                      '-s', '3', '-c', '16', 'in', 'out'])
    dims = dims_from_args(args)
    assert dims[Dim.READ] == 128
    assert dims[Dim.PHS1] == 64
    assert dims[Dim.PHS2] == 8
    assert dims[Dim.SLICE] == 3
    assert dims[Dim.COIL] == 16
    assert dims[Dim.TE] == 1
    assert args.adcs == 0


def test_convert(tmp_path, twix_builder, make_adc):
    builder = twix_builder(True, 8, 2)
    data = [builder.add_adc([line], make_adc(8, 2)) for line in range(3)]
    src = builder.write(tmp_path / 'meas.dat')
    dst = tmp_path / 'kspace'

    assert main(['-x', '8', '-y', '3', '-c', '2', str(src), str(dst)]) == 0
    out = readcfl(dst)
    for line in range(3):
        assert np.array_equal(out[:, line, 0, :, 0, 0, 0, 0,
                                  0, 0, 0, 0, 0, 0, 0, 0], data[line])


def test_convert_error(tmp_path, twix_builder, caplog):
    builder = twix_builder(False, 8, 1)
    builder.add_adc([0])
    src = builder.write(tmp_path / 'meas.dat')
    assert main(['-x', '16', str(src), str(tmp_path / 'out')]) == 1
    assert 'wrong number of samples' in caplog.text


def test_missing_input(tmp_path):
    assert main([str(tmp_path / 'nope.dat'), str(tmp_path / 'out')]) == 1
