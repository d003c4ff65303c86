"""Exceptions raised by the substring trie package."""


class TrieError(Exception):
    """Base class for all substring trie errors."""


class InvalidKeyError(TrieError, TypeError):
    """Raised when a key is not a string."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Trie keys must be str, got {type(key).__name__}")


class UnhashableValueError(TrieError, TypeError):
    """Raised when a value cannot be stored in a trie value set."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Trie values must be hashable, got {type(value).__name__}")


class KeyTooLongError(TrieError, ValueError):
    """Raised by the index when a key exceeds the configured maximum length."""

    def __init__(self, key: str, max_key_length: int) -> None:
        self.key = key
        self.max_key_length = max_key_length
        super().__init__(
            f"Key of length {len(key)} exceeds the maximum of {max_key_length} characters"
        )
