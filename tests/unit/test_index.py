"""Unit tests for the trie index manager."""

import pytest

from substring_trie.config import Settings
from substring_trie.core.index import TrieIndex
from substring_trie.core.trie import TrieInsertionOptions
from substring_trie.exceptions import InvalidKeyError, KeyTooLongError, UnhashableValueError


class TestTrieIndex:
    """Test cases for the TrieIndex class."""

    @pytest.fixture
    def settings(self):
        """Settings enabling every insertion option."""
        return Settings(
            include_non_prefixed_matches=True,
            include_case_insensitive_matches=True,
            include_diacritics_insensitive_matches=True,
            max_results=2,
            max_key_length=32,
        )

    @pytest.fixture
    def index(self, settings):
        """Create an index instance for testing."""
        return TrieIndex(settings=settings)

    @pytest.fixture
    def sample_mappings(self):
        """Sample key-to-value mappings for testing."""
        return {
            "foo": "foo",
            "food": ["food", "groceries"],
            "foobar": "foobar",
            "Laïcité": "Laïcité",
        }

    def test_initialization(self, index):
        """Test index initialization."""
        assert len(index) == 0
        assert index.trie.has_children is False
        assert index._stats["total_queries"] == 0
        assert index._stats["last_updated"] is None

    def test_add_uses_settings_options(self, index):
        """Test add falls back to the settings insertion options."""
        variants = index.add("Laïcité", "Laïcité")

        assert variants == ["Laïcité", "laïcité", "Laicite", "laicite"]
        assert index.trie.find("cite") == ["Laïcité"]
        assert ("Laïcité", "Laïcité") in index

    def test_add_with_explicit_options(self, index):
        """Test explicit options override the settings."""
        variants = index.add("FooBar", 1, TrieInsertionOptions.NONE)

        assert variants == ["FooBar"]
        assert index.trie.find("foo") == []
        assert index.trie.find("Foo") == [1]

    def test_add_merges_variants(self, index):
        """Test adding a pair again records any new variants."""
        index.add("ABC", "v", TrieInsertionOptions.NONE)
        index.add("ABC", "v", TrieInsertionOptions.INCLUDE_CASE_INSENSITIVE_MATCHES)

        assert index.variants("ABC", "v") == ["ABC", "abc"]
        assert len(index) == 1

    def test_add_empty_key_not_tracked(self, index):
        """Test an empty key is accepted but not tracked."""
        assert index.add("", "value") == [""]
        assert len(index) == 0

    def test_add_key_too_long(self, index):
        """Test keys over the configured length are rejected."""
        with pytest.raises(KeyTooLongError) as exc_info:
            index.add("x" * 33, "value")

        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.max_key_length == 32
        assert index.trie.has_children is False

    def test_add_invalid_key(self, index):
        """Test non-string keys are rejected."""
        with pytest.raises(InvalidKeyError):
            index.add(42, "value")

    def test_load(self, index, sample_mappings):
        """Test bulk loading single values and collections."""
        index.load(sample_mappings)

        assert len(index) == 5
        assert ("food", "groceries") in index
        assert set(index.trie.find("foo")) == {"foo", "food", "groceries", "foobar"}

    def test_discard(self, index, sample_mappings):
        """Test discarding a pair removes all of its variants."""
        index.load(sample_mappings)

        assert index.discard("Laïcité", "Laïcité") is True
        assert index.trie.find("laicite") == []
        assert index.trie.find("Laïcité") == []
        assert ("Laïcité", "Laïcité") not in index

    def test_discard_keeps_pairs_sharing_value(self, index):
        """Test discarding one pair leaves other pairs with the same value searchable."""
        index.add("Foo", "v", TrieInsertionOptions.INCLUDE_CASE_INSENSITIVE_MATCHES)
        index.add("foo", "v", TrieInsertionOptions.NONE)

        assert index.discard("Foo", "v") is True

        assert ("foo", "v") in index
        assert index.search("foo").results == ["v"]
        assert index.search("Foo").results == []

    def test_discard_restores_non_prefixed_entries(self, index):
        """Test substring entries of remaining pairs survive a discard."""
        index.add("barn", "v")
        index.add("born", "v")

        index.discard("barn", "v")

        assert index.search("rn").results == ["v"]
        assert index.search("orn").results == ["v"]
        assert index.search("arn").results == []

    def test_discard_not_found(self, index):
        """Test discarding an unknown pair."""
        assert index.discard("nonexistent", "value") is False

    def test_discard_unhashable(self, index):
        """Test discarding with an unhashable value."""
        with pytest.raises(UnhashableValueError):
            index.discard("key", {"not": "hashable"})

    def test_discard_everything_empties_trie(self, index, sample_mappings):
        """Test discarding every pair prunes the whole trie."""
        index.load(sample_mappings)
        pairs = [
            (key, value)
            for key, values in sample_mappings.items()
            for value in (values if isinstance(values, list) else [values])
        ]

        assert index.discard_many(pairs) == 5
        assert index.trie.has_children is False
        assert index.trie.has_values is False
        assert len(index) == 0

    def test_search(self, index, sample_mappings):
        """Test search puts exact matches first and caps results."""
        index.load(sample_mappings)

        result = index.search("foo")

        assert result.query == "foo"
        assert result.results[0] == "foo"
        assert len(result.results) == 2
        assert result.exact_match_count == 1
        assert result.total_results == 4
        assert result.truncated is True
        assert result.execution_time_ms >= 0.0

    def test_search_max_results_override(self, index, sample_mappings):
        """Test a per-query result cap."""
        index.load(sample_mappings)

        result = index.search("foo", max_results=10)

        assert len(result.results) == 4
        assert result.truncated is False

    def test_search_invalid_max_results(self, index, sample_mappings):
        """Test zero and negative result caps are rejected."""
        index.load(sample_mappings)

        with pytest.raises(ValueError):
            index.search("foo", max_results=0)

        with pytest.raises(ValueError):
            index.search("foo", max_results=-1)

        assert index.get_stats().total_queries == 0

    def test_search_no_match(self, index, sample_mappings):
        """Test search with no matches."""
        index.load(sample_mappings)

        result = index.search("xyz")

        assert result.results == []
        assert result.total_results == 0
        assert result.exact_match_count == 0
        assert result.truncated is False

    def test_stats(self, index, sample_mappings):
        """Test statistics reflect pairs, variants and queries."""
        index.load(sample_mappings)
        index.search("foo")

        stats = index.get_stats()

        assert stats.total_pairs == 5
        # Laïcité has four variants, every other key only itself
        assert stats.total_variants == 8
        assert stats.total_queries == 1
        assert stats.trie.node_count > 0
        assert stats.last_updated is not None

    def test_clear(self, index, sample_mappings):
        """Test clearing the index."""
        index.load(sample_mappings)
        index.search("foo")

        index.clear()

        assert len(index) == 0
        assert index.trie.has_children is False
        assert index.get_stats().total_queries == 0

    def test_contains_unhashable(self, index):
        """Test membership with an unhashable pair is False."""
        assert (["key"], "value") not in index
