from setuptools import setup
import os

# Most of the relevant info is stored in this file
info_file = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                         'twixread', 'info.py')
exec(open(info_file).read())


setup(name=NAME,
      description=DESCRIPTION,
      author=AUTHOR,
      maintainer=MAINTAINER,
      license=LICENSE,
      classifiers=CLASSIFIERS,
      platforms=PLATFORMS,
      version=VERSION,
      provides=PROVIDES,
      packages=['twixread'],
      install_requires=INSTALL_REQUIRES,
      extras_require=EXTRAS_REQUIRES,
      entry_points=ENTRY_POINTS,
      python_requires=PYTHON_REQUIRES,
     )
