"""
rippleio is a package for reading the binary recording files written by
Ripple (and Blackrock compatible) neurophysiology acquisition systems:
continuous NFx/NSx files and NEV event files.
"""

import importlib.metadata

# this need to be at the begining because some sub module will need the version
__version__ = importlib.metadata.version("rippleio")

import logging

logging_handler = logging.StreamHandler()

from rippleio.core import *
from rippleio.io import read, read_nfx, read_nsx, read_nev
