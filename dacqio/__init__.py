'''
dacqio is a package for reading and writing the tetrode, EEG and input
files produced by the Axona DACQ electrophysiology acquisition system
'''
import importlib.metadata
# this need to be at the begining because some sub module will need the version
__version__ = importlib.metadata.version("dacqio")

import logging

logging_handler = logging.StreamHandler()

from dacqio.core import *
from dacqio.io import *
