"""
This module defines the exceptions that can be thrown by :py:mod:`ldap_entry`.
"""

__author__ = "Matt Pryor"
__copyright__ = "Copyright 2015 UK Science and Technology Facilities Council"


class EntryError(Exception):
    """
    Base class for errors thrown by :py:mod:`ldap_entry`.
    """


class InvalidSearchResultError(EntryError, ValueError):
    """
    Raised when an LDAP search result cannot be turned into an
    :py:class:`~.entry.Entry`, e.g. because it is a search reference or it has
    no DN.
    """
