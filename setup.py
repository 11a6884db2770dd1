#!/usr/bin/env python
from setuptools import setup, find_packages

setup(name  = 'cachelock',
    version = '1.0.0',
    description = 'A non blocking lock store built on top of a key value cache',
    long_description='A non blocking, ttl based lock store built on top of a key value cache',
    classifiers = [
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: POSIX :: Linux',
        'Operating System :: Unix',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Networking',
        'Topic :: Utilities'
    ],
    keywords = 'python lock cache dynamodb',
    license = 'BSD',
    packages = find_packages(),
    platforms = ['Linux', 'Mac OS X', 'Win'],
    include_package_data = True,
    zip_safe = True,
    python_requires = '>=3.7',
    install_requires = [ 'boto3 >= 1.9.0' ],
    extras_require = {
        'quality'   : [ 'coverage >= 3.5.3', 'pytest >= 6.0', 'mock >= 1.0.0', 'pycodestyle >= 2.0.0' ],
        'test'      : [ 'pytest >= 6.0', 'mock >= 1.0.0' ],
        'documents' : [ 'Sphinx >= 1.2.2' ],
    },
)
