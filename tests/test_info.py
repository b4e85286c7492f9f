from twixread import info


def test_package_metadata():
    assert info.NAME == 'twixread'
    assert info.VERSION == info.__version__
    assert info.AUTHOR == 'twixread developers'
    assert info.MAINTAINER == 'twixread developers'
    assert 'numpy' in info.INSTALL_REQUIRES
    assert 'pytest' in info.EXTRAS_REQUIRES['test']


def test_no_unused_metadata():
    assert not hasattr(info, 'ISRELEASE')
    assert not hasattr(info, 'AUTHOR_EMAIL')
