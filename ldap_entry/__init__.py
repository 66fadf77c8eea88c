"""
This is the main module for the LDAP entry library.
"""

__author__ = "Matt Pryor"
__copyright__ = "Copyright 2015 UK Science and Technology Facilities Council"

__version__ = "0.1"

from .entry import *
from .exceptions import *
from .results import *
