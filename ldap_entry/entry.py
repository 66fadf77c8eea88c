"""
This module provides :py:class:`Entry`, the value object used to represent a
single record from an LDAP directory.
"""

__author__ = "Matt Pryor"
__copyright__ = "Copyright 2015 UK Science and Technology Facilities Council"

import logging
from types import MappingProxyType


_log = logging.getLogger(__name__)


class Entry:
    """
    Represents an LDAP entry, i.e. a DN and a dictionary of attributes.

    The attribute dictionary maps attribute names to a **list of values** for
    that attribute, even when there is only one value. Attribute names are kept
    exactly as given, but a lowercased index is kept in step with them so that
    attributes can also be looked up case-insensitively::

        entry = Entry('cn=john,dc=example,dc=com', {'mail': ['john@example.com']})
        entry.get_attribute('MAIL')                          # None
        entry.get_attribute('MAIL', force_lowercase = True)  # ['john@example.com']

    If two attribute names only differ by case, the lowercased index holds the
    value that was written last. At construction time, that means the one that
    comes last in the iteration order of ``attributes``.

    Entries are not thread-safe. Callers that share an entry between threads
    must synchronise calls to :py:meth:`set_attribute` and
    :py:meth:`remove_attribute` themselves.

    :param dn: The DN of the entry
    :param attributes: The attributes of the entry, which are copied (optional,
                       defaults to no attributes)
    """
    def __init__(self, dn, attributes = None):
        self._dn = dn
        self._attributes = dict(attributes) if attributes is not None else {}
        self._lowercase_attributes = {
            name.lower() : value for name, value in self._attributes.items()
        }

    @property
    def dn(self):
        """
        The DN of the entry.
        """
        return self._dn

    def get_dn(self):
        """
        Returns the DN of the entry.
        """
        return self._dn

    def has_attribute(self, name, force_lowercase = False):
        """
        Returns ``True`` if the entry has the given attribute, ``False`` otherwise.

        :param name: The name of the attribute
        :param force_lowercase: If ``True``, the attribute name is matched
                                case-insensitively (optional, defaults to ``False``)
        """
        if force_lowercase:
            return name.lower() in self._lowercase_attributes
        return name in self._attributes

    def get_attribute(self, name, force_lowercase = False):
        """
        Returns the list of values for the given attribute, or ``None`` if the
        entry does not have the attribute.

        An attribute that is present with no values gives an empty list, **not**
        ``None``.

        :param name: The name of the attribute
        :param force_lowercase: If ``True``, the attribute name is matched
                                case-insensitively (optional, defaults to ``False``)
        """
        if force_lowercase:
            return self._lowercase_attributes.get(name.lower())
        return self._attributes.get(name)

    def get_attributes(self, force_lowercase = False):
        """
        Returns a read-only view of the attribute dictionary.

        :param force_lowercase: If ``True``, the view is keyed by the lowercased
                                attribute names (optional, defaults to ``False``)
        """
        if force_lowercase:
            return MappingProxyType(self._lowercase_attributes)
        return MappingProxyType(self._attributes)

    def set_attribute(self, name, value):
        """
        Sets the values for the given attribute, replacing any existing values.

        :param name: The name of the attribute
        :param value: The list of values for the attribute
        """
        _log.debug('Setting attribute {} for {}'.format(name, self._dn))
        self._attributes[name] = value
        self._lowercase_attributes[name.lower()] = value

    def remove_attribute(self, name):
        """
        Removes the given attribute. If the entry does not have the attribute,
        this is a no-op.

        The lowercased index entry for ``name`` is removed even if another
        attribute whose name differs only by case is still present.

        :param name: The name of the attribute
        """
        _log.debug('Removing attribute {} from {}'.format(name, self._dn))
        self._attributes.pop(name, None)
        self._lowercase_attributes.pop(name.lower(), None)

    def to_ldap(self):
        """
        Returns a ``(dn, attributes)`` pair for this entry that is suitable for
        passing to ``ldap3.Connection.add``.

        Attributes with no values are left out, since LDAP has no notion of an
        attribute that is present but empty.
        """
        attributes = { k : v for k, v in self._attributes.items() if v }
        return self._dn, attributes

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return self._dn == other._dn and self._attributes == other._attributes

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self._dn)
