""" Information for setup.py that we may also want to access in python
"""

_version_major = 0
_version_minor = 1
_version_micro = 0
_version_extra = ''
__version__ = "%s.%s.%s%s" % (_version_major,
                              _version_minor,
                              _version_micro,
                              _version_extra)

CLASSIFIERS = ["Development Status :: 3 - Alpha",
               "Environment :: Console",
               "Intended Audience :: Science/Research",
               "Operating System :: OS Independent",
               "Programming Language :: Python",
               "Programming Language :: Python :: 3",
               "Topic :: Scientific/Engineering :: Medical Science Apps."]

description = 'Convert Siemens twix raw data files into BART cfl arrays'

# Hard dependencies
install_requires = ['numpy',
                   ]

# Extra requirements for testing
extras_requires = {'test': ['pytest'],
                  }

# Command line entry points
entry_points = {'console_scripts': ['twixread = twixread.cli:main'],
               }


NAME                = 'twixread'
AUTHOR              = "twixread developers"
MAINTAINER          = "twixread developers"
DESCRIPTION         = description
LICENSE             = "BSD"
CLASSIFIERS         = CLASSIFIERS
PLATFORMS           = "OS Independent"
VERSION             = __version__
INSTALL_REQUIRES    = install_requires
EXTRAS_REQUIRES     = extras_requires
ENTRY_POINTS        = entry_points
PYTHON_REQUIRES     = '>=3.6'
PROVIDES            = ["twixread"]
