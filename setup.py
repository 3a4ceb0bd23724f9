import os
import re

from setuptools import setup


def get_version():
    module_init = 'bluen/version.py'

    if not os.path.isfile(module_init):
        module_init = '../' + module_init
        if not os.path.isfile(module_init):
            raise ValueError('Unable to determine version!')

    with open(module_init) as version_file:
        return re.search(r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
                         version_file.read()).group(1)


setup(name='bluen',
      version=get_version(),
      description='Typed, live mirrors of BlueZ adapters, devices and batteries',
      url='https://github.com/bluen/bluen',
      author='bluen Developers',
      license='LGPL',
      platforms='Linux',
      packages=['bluen'],
      python_requires='>=3.9',
      install_requires=['colorlog', 'dbus-fast', 'ruamel.yaml>=0.17',
                        'traitlets>=5', 'wrapt'],
      extras_require={
          'test': ['pytest'],
      },
      keywords='bluetooth bluez dbus adapter device battery asyncio',
      include_package_data=True,
      zip_safe=False,
      classifiers=[
          'Development Status :: 3 - Alpha',
          'Framework :: AsyncIO',
          'Intended Audience :: Developers',
          'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
          'Operating System :: POSIX :: Linux',
          'Programming Language :: Python :: 3 :: Only',
          'Topic :: System :: Hardware'
      ])
