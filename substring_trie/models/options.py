"""Insertion options for the trie."""

from enum import Flag


class TrieInsertionOptions(Flag):
    """Transformations applied to a key to insert it under additional keys."""

    NONE = 0

    # Inserts every non-prefixed suffix of the key as well as the key itself.
    INCLUDE_NON_PREFIXED_MATCHES = 1 << 0

    # Inserts the lowercase version of the key.
    INCLUDE_CASE_INSENSITIVE_MATCHES = 1 << 1

    # Inserts the key with all diacritics removed.
    INCLUDE_DIACRITICS_INSENSITIVE_MATCHES = 1 << 2
