#!/usr/bin/env python

from setuptools import setup, find_packages

long_description = open("README.rst").read()
install_requires = ['numpy>=1.18.5',
                    'quantities>=0.12.1']
extras_require = {
    'test': ['pytest'],
}

with open("rippleio/version.py") as fp:
    d = {}
    exec(fp.read(), d)
    rippleio_version = d['version']

setup(
    name="rippleio",
    version=rippleio_version,
    packages=find_packages(include=["rippleio", "rippleio.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    description="Reading of the NFx, NSx and NEV binary files written by "
                "Ripple neurophysiology acquisition systems",
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
