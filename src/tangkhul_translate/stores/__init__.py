"""
Storage collaborators for the resolution engine.

The engine only talks to the abstract stores; the in-memory implementations
back tests and single-process deployments.
"""
from .base import AnalyticsSink, CacheStore, ConsensusStore, EntryStore
from .eviction import (
    EvictionPolicy,
    LRUEviction,
    NoEviction,
    TTLEviction,
    create_eviction_policy,
)
from .log_sink import LoggingAnalyticsSink
from .memory import (
    InMemoryAnalyticsSink,
    InMemoryCacheStore,
    InMemoryConsensusStore,
    InMemoryEntryStore,
)

__all__ = [
    "EntryStore",
    "ConsensusStore",
    "CacheStore",
    "AnalyticsSink",
    "EvictionPolicy",
    "NoEviction",
    "LRUEviction",
    "TTLEviction",
    "create_eviction_policy",
    "InMemoryEntryStore",
    "InMemoryConsensusStore",
    "InMemoryCacheStore",
    "InMemoryAnalyticsSink",
    "LoggingAnalyticsSink",
]
