from dataclasses import dataclass

import pytest

from reqlscope import Adapter, MemoryStore


@dataclass
class User:
    id: str = None
    name: str = None
    age: int = None


def to_users(documents):
    return [User(**doc) for doc in documents]


@pytest.fixture
def store():
    return MemoryStore(mappers={'users': to_users})


@pytest.fixture
def adapter(store):
    return Adapter(store)


@pytest.fixture
def users(store):
    """L (32) and MG (31), in that insertion order."""
    return to_users(store.insert('users', {'name': 'L', 'age': 32}, {'name': 'MG', 'age': 31}))


@pytest.fixture
def ageless(store, users):
    """Adds S, who has no age."""
    return users + to_users(store.insert('users', {'name': 'S'}))
