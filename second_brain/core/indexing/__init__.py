"""
Index maintenance: synchronous indexer and background reindex scheduler.
"""

from .indexer import Indexer
from .reindex_scheduler import ReindexScheduler, session_scoped_pass

__all__ = ["Indexer", "ReindexScheduler", "session_scoped_pass"]
