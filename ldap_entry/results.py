"""
This module provides facilities for turning the results of an
`ldap3 <https://ldap3.readthedocs.org/>`_ search into :py:class:`~.entry.Entry`
objects.

The functions here accept the result dictionaries that ldap3 produces, e.g. the
items of ``Connection.response`` or the items yielded by
``Connection.extend.standard.paged_search(..., generator = True)``.
"""

__author__ = "Matt Pryor"
__copyright__ = "Copyright 2015 UK Science and Technology Facilities Council"

import logging
from collections.abc import Iterable

import ldap3.utils.config

from .entry import Entry
from .exceptions import InvalidSearchResultError


_log = logging.getLogger(__name__)


#: The result type for a search result containing an entry
SEARCH_RESULT_ENTRY = 'searchResEntry'
#: The result type for a search reference (i.e. a referral)
SEARCH_RESULT_REFERENCE = 'searchResRef'


def _to_str(value, encoding):
    """
    Converts a single value from LDAP to a string, decoding bytes with the given
    encoding or ldap3's configured server encoding.

    Values that cannot be decoded (e.g. binary attributes like ``jpegPhoto``) are
    returned as-is.
    """
    if not isinstance(value, (bytes, bytearray)):
        return str(value)
    encoding = encoding or ldap3.utils.config.get_config_parameter('DEFAULT_SERVER_ENCODING')
    try:
        return value.decode(encoding)
    except UnicodeDecodeError:
        return value


def _as_list(values):
    """
    Returns the given attribute value(s) as a list, wrapping single values.
    """
    if isinstance(values, Iterable) and not isinstance(values, (str, bytes, bytearray)):
        return list(values)
    return [values]


def from_search_result(result, encoding = None):
    """
    Builds an :py:class:`~.entry.Entry` from a single ldap3 search result.

    The raw attribute values are preferred over the formatted ones, since they are
    always lists of bytes. Each value is decoded to a string using ``encoding``,
    or ldap3's configured server encoding if not given.

    Args:
        result: The search result dictionary.
        encoding: The encoding to use for decoding values (optional).

    Returns:
        An :py:class:`~.entry.Entry`.

    Raises:
        :py:class:`~.exceptions.InvalidSearchResultError` if the result is a
        search reference or has no DN.
    """
    result_type = result.get('type', SEARCH_RESULT_ENTRY)
    if result_type != SEARCH_RESULT_ENTRY:
        raise InvalidSearchResultError(
            "Search result of type '{}' is not an entry".format(result_type)
        )
    dn = result.get('dn')
    if dn is None:
        raise InvalidSearchResultError('Search result has no DN')
    if 'raw_attributes' in result:
        attrs = result['raw_attributes']
    else:
        attrs = result.get('attributes', {})
    attributes = {
        name : [_to_str(v, encoding) for v in _as_list(values)]
        for name, values in attrs.items()
    }
    _log.debug('Converted search result for {} ({} attributes)'.format(dn, len(attributes)))
    return Entry(_to_str(dn, encoding), attributes)


def entries_from_search(results, encoding = None):
    """
    Returns a generator of :py:class:`~.entry.Entry` objects for the given ldap3
    search results.

    Search references are skipped. Any other invalid result raises
    :py:class:`~.exceptions.InvalidSearchResultError`.

    Args:
        results: An iterable of search result dictionaries.
        encoding: The encoding to use for decoding values (optional).
    """
    for result in results:
        if result.get('type') == SEARCH_RESULT_REFERENCE:
            _log.debug('Skipping search reference {}'.format(result.get('uri')))
            continue
        yield from_search_result(result, encoding)


class EntryCollection:
    """
    A lazily evaluated collection of :py:class:`~.entry.Entry` objects built
    from ldap3 search results.

    Nothing is converted until the entries are requested. Entries are cached on
    first access, so the underlying results are only consumed once.

    :param results: An iterable of search result dictionaries
    :param encoding: The encoding to use for decoding values (optional)
    """
    def __init__(self, results, encoding = None):
        self._results = results
        self._encoding = encoding

    @property
    def _cached(self):
        if not hasattr(self, '_cache'):
            self._cache = list(entries_from_search(self._results, self._encoding))
        return self._cache

    def __iter__(self):
        """
        Caches entries on first iteration and returns cache.
        """
        return iter(self._cached)

    def __len__(self):
        return len(self._cached)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            raise TypeError('Multi-dimensional indexing of collections is not supported')
        # Slices give a plain list
        return self._cached[key]

    def one(self):
        """
        Returns the first entry in the collection, or ``None`` if the collection
        is empty.
        """
        return next(iter(self), None)

    def to_list(self):
        """
        Returns the entries in the collection as a new list.
        """
        return list(self._cached)
