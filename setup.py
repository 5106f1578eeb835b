#!/usr/bin/env python

from setuptools import setup, find_packages

long_description = open("README.rst").read()
install_requires = ['packaging',
                    'numpy>=1.18.5',
                    'quantities>=0.12.1']
extras_require = {
    'test': ['pytest'],
}

with open("dacqio/version.py") as fp:
    d = {}
    exec(fp.read(), d)
    dacqio_version = d['version']

setup(
    name="dacqio",
    version=dacqio_version,
    packages=find_packages(include=['dacqio', 'dacqio.*']),
    install_requires=install_requires,
    extras_require=extras_require,
    description="Reading and writing of Axona DACQ tetrode, EEG and input "
                "files in Python",
    long_description=long_description,
    license="BSD-3-Clause",
    python_requires=">=3.8",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: BSD License',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Scientific/Engineering']
)
