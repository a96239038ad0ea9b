VERSION = '0.1.0'

from .conditions import Condition, ConditionList, Asc, Desc, asc, desc, fold
from .collection import ScopedCollection, CONDITION_OPERATIONS
from .fragments import FragmentProvider, ContextFragments, fragment_provider
from .query import query, Query
from .memory import MemoryCollection, MemoryStore
from .rethink import ReqlCollection, ReqlTables, connect
from .adapter import Adapter
from .config import Settings, settings

__all__ = [
    'Condition', 'ConditionList', 'Asc', 'Desc', 'asc', 'desc', 'fold',
    'ScopedCollection', 'CONDITION_OPERATIONS',
    'FragmentProvider', 'ContextFragments', 'fragment_provider',
    'query', 'Query',
    'MemoryCollection', 'MemoryStore',
    'ReqlCollection', 'ReqlTables', 'connect',
    'Adapter',
    'Settings', 'settings',
    'VERSION',
]
