"""Response and statistics models."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class TrieStats(BaseModel):
    """Shape of a trie subtree."""

    node_count: int = Field(..., ge=0, description="Nodes below the root of the subtree")
    exact_match_entries: int = Field(..., ge=0, description="Values stored as exact matches")
    substring_match_entries: int = Field(..., ge=0, description="Values stored as substring matches")
    max_depth: int = Field(..., ge=0, description="Length of the longest branch")


class IndexStats(BaseModel):
    """Statistics for a trie index."""

    total_pairs: int = Field(..., ge=0, description="Tracked (key, value) pairs")
    total_variants: int = Field(..., ge=0, description="Key variants inserted for tracked pairs")
    total_queries: int = Field(..., ge=0, description="Searches served")
    total_execution_time_ms: float = Field(..., ge=0.0, description="Time spent in searches")
    trie: TrieStats = Field(..., description="Shape of the underlying trie")
    last_updated: Optional[datetime] = Field(None, description="Time of the last mutation")


class SearchResponse(BaseModel):
    """Response for a trie search."""

    query: str = Field(..., description="Original search query")
    results: List[Any] = Field(..., description="Matched values, exact matches first")
    exact_match_count: int = Field(..., ge=0, description="Leading results that match the query exactly")
    total_results: int = Field(..., ge=0, description="Number of matches before truncation")
    truncated: bool = Field(..., description="Whether results were cut to the result cap")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")
