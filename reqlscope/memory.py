"""
In-memory documents store with RethinkDB operator semantics.

Used for tests and for running queries without a server. Conditions are
lazy: each one wraps the previous row source, and rows are only read from
the store when a terminal method runs.

Usage:
    store = MemoryStore()
    store.insert('users', {'name': 'L', 'age': 32}, {'name': 'MG', 'age': 31})
    query(store('users')).order('age').all()
"""

import copy
import itertools
import uuid
from collections.abc import Mapping

from .collection import ScopedCollection
from .conditions import Asc, Desc


def _type_rank(value):
    """Sort key following ReQL type ordering: array < bool < null < number < object < binary < string."""
    if isinstance(value, (list, tuple)):
        return (0, [_type_rank(v) for v in value])
    if isinstance(value, bool):
        return (1, value)
    if value is None:
        return (2, 0)
    if isinstance(value, (int, float)):
        return (3, value)
    if isinstance(value, Mapping):
        return (4, sorted((k, _type_rank(v)) for k, v in value.items()))
    if isinstance(value, (bytes, bytearray)):
        return (5, bytes(value))
    return (6, str(value))


def _equal(a, b):
    """ReQL equality: a bool never equals a number, 1 equals 1.0."""
    return _type_rank(a) == _type_rank(b)


def _missing(exc):
    """True for errors that mean a field or element does not exist."""
    if isinstance(exc, (KeyError, IndexError)):
        return True
    return isinstance(exc, TypeError) and "'NoneType' object is not subscriptable" in str(exc)


def _safe(predicate):
    # Only a missing field means "no match"; other errors propagate.
    def match(doc):
        try:
            return bool(predicate(doc))
        except (KeyError, IndexError, TypeError) as exc:
            if not _missing(exc):
                raise
            return False
    return match


def _matcher(predicate):
    if isinstance(predicate, Mapping):
        pairs = dict(predicate)
        return lambda doc: all(k in doc and _equal(doc[k], v) for k, v in pairs.items())
    if callable(predicate):
        return _safe(predicate)
    raise TypeError(f'reqlscope: memory collection cannot evaluate predicate {predicate!r}')


def _sort_spec(key):
    reverse = isinstance(key, Desc)
    if isinstance(key, Asc):
        key = key.field
    if callable(key):
        getter = _safe_value(key)
    else:
        getter = lambda doc: doc.get(key)
    return getter, reverse


def _safe_value(fn):
    def value(doc):
        try:
            return fn(doc)
        except (KeyError, IndexError, TypeError) as exc:
            if not _missing(exc):
                raise
            return None
    return value


class MemoryCollection(ScopedCollection):
    """A lazily scoped view over rows of (insertion sequence, document)."""

    def __init__(self, rows, deserialize=None, name=None):
        super().__init__(deserialize)
        self._rows = rows
        self.name = name

    def _scope(self, transform):
        rows = self._rows
        return MemoryCollection(lambda: transform(rows()), self._deserialize, self.name)

    def filter(self, predicate):
        match = _matcher(predicate)
        return self._scope(lambda rows: [row for row in rows if match(row[1])])

    def pluck(self, *fields):
        return self._scope(lambda rows: [
            (seq, {f: doc[f] for f in fields if f in doc}) for seq, doc in rows
        ])

    def has_fields(self, *fields):
        return self._scope(lambda rows: [
            row for row in rows if all(row[1].get(f) is not None for f in fields)
        ])

    def limit(self, number):
        return self._scope(lambda rows: rows[:number])

    def order_by(self, *keys, index=None):
        specs = [_sort_spec(k) for k in ([index] if index is not None else []) + list(keys)]

        def sort(rows):
            # Start from insertion order so an earlier sort never leaks into this one.
            result = sorted(rows, key=lambda row: row[0])
            for getter, reverse in reversed(specs):
                result.sort(key=lambda row: _type_rank(getter(row[1])), reverse=reverse)
            return result

        return self._scope(sort)

    def _values(self, field):
        return [doc[field] for _, doc in self._rows() if doc.get(field) is not None]

    def _numbers(self, field):
        return [v for v in self._values(field) if not isinstance(v, bool)]

    def count(self):
        return len(self._rows())

    def sum(self, field):
        return sum(self._numbers(field), 0)

    def avg(self, field):
        values = self._numbers(field)
        if not values:
            return None
        return sum(values, 0) / len(values)

    def max(self, field):
        values = self._values(field)
        return max(values, key=_type_rank) if values else None

    def min(self, field):
        values = self._values(field)
        return min(values, key=_type_rank) if values else None

    def execute(self):
        return self._deserialize([copy.deepcopy(doc) for _, doc in self._rows()])

    def __repr__(self):
        return f'<MemoryCollection {self.name!r}>'


class MemoryStore:
    """Named in-memory tables. Calling the store with a name returns its base collection."""

    def __init__(self, mappers=None):
        self._tables = {}
        self._mappers = dict(mappers or {})
        self._sequence = itertools.count()

    def collection(self, name, deserialize=None):
        return MemoryCollection(lambda: list(self._tables.get(name, ())), deserialize, name)

    def __call__(self, name):
        return self.collection(name, self._mappers.get(name))

    def insert(self, name, *documents):
        """Store documents, assigning a string id to those without one. Returns copies of what was stored."""
        table = self._tables.setdefault(name, [])
        stored = []
        for document in documents:
            doc = copy.deepcopy(dict(document))
            if doc.get('id') is None:
                doc['id'] = str(uuid.uuid4())
            table.append((next(self._sequence), doc))
            stored.append(copy.deepcopy(doc))
        return stored

    def clear(self, name):
        self._tables.pop(name, None)

    @property
    def names(self):
        return sorted(self._tables)
