# FILE INFO ###################################################
# Created on October 18, 2026
###############################################################

"""Evsim is a discrete-event simulation engine in Python."""

import sys, argparse

if sys.version_info[:2] < (3, 9):
    raise ImportError("Evsim requires Python 3.9 and above (%d.%d detected)." %
                      sys.version_info[:2])

from .event import *
from .process import *
from .condition import *
from .resource import *
from .registry import *
from .simulator import *

# parse command line (filter out those arguments known by evsim)
parser = argparse.ArgumentParser(add_help=False)
parser.add_argument("-v", "--verbose", action="store_true",
                    help="enable verbose information")
parser.add_argument("-vv", "--debug", action="store_true",
                    help="enable debug information")
args, sys.argv[1:] = parser.parse_known_args()

__version__ = '0.1.0'
