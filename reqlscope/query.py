"""
reqlscope Query Builder

Fluent, lazy interface for filtering and shaping the documents of a
collection. Every chain method only records a condition; documents are
fetched when a terminal method (all, count, sum, average, max, min) runs.

Usage:
    articles = query(collection).where(language='python').and_(framework='flask').desc('users_count').all()
"""

import logging
from collections.abc import Mapping

from .conditions import ConditionList, fold, desc as descending
from .fragments import fragment_provider

logger = logging.getLogger(__name__)


class Query:
    """
    Chainable condition accumulator over a base collection.

    Usage:
        q = Query(collection, context=ArticleRepository, block=lambda q: q.where(author_id=23))
        q.desc('comments_count').limit(10).all()
    """

    def __init__(self, collection, context=None, block=None):
        self._collection = collection
        self._fragments = fragment_provider(context)
        self._conditions = ConditionList()

        if block is not None:
            block(self)

    @property
    def collection(self):
        """The unscoped base collection."""
        return self._collection

    @property
    def fragments(self):
        """The FragmentProvider used for unknown chain methods, or None."""
        return self._fragments

    @property
    def conditions(self) -> ConditionList:
        """Recorded conditions (copy)."""
        return self._conditions.copy()

    def where(self, condition=None, /, **fields):
        """
        Filter documents, like SQL WHERE.

        Args:
            condition: a mapping with exactly one field -> value pair, or a
                predicate such as ``lambda doc: doc['age'] > 10``
            **fields: keyword form of a one-pair mapping, ``where(name='L')``

        Raises:
            ValueError: when no condition is given, or the mapping does not
                have exactly one pair
        """
        if condition is not None and fields:
            raise ValueError('reqlscope: pass a condition or keyword fields, not both')
        if condition is None:
            condition = fields or None
        if condition is None:
            raise ValueError('reqlscope: you need to specify a condition')

        if isinstance(condition, Mapping):
            if len(condition) != 1:
                raise ValueError(f'reqlscope: a mapping condition takes exactly one pair, got {len(condition)}')
            condition = dict(condition)

        self._conditions.append('filter', condition)
        return self

    and_ = where

    def pluck(self, *fields):
        """Only return the given fields. Documents lacking a field omit it. No fields means no restriction."""
        if fields:
            self._conditions.append('pluck', *fields)
        return self

    def has_fields(self, *fields):
        """Only include documents that have all the given fields."""
        if not fields:
            raise ValueError('reqlscope: has_fields needs at least one field')
        self._conditions.append('has_fields', *fields)
        return self

    def limit(self, number):
        """Cap the number of documents returned."""
        if isinstance(number, bool) or not isinstance(number, int) or number < 0:
            raise ValueError(f'reqlscope: limit must be a non-negative integer, got {number!r}')
        self._conditions.append('limit', number)
        return self

    def order(self, *fields, index=None):
        """
        Sort ascending by the given fields, and optionally by a secondary index.

        The last sort in the chain decides the final order; earlier sorts
        are superseded, not combined.

        Usage:
            query.order('name', 'year', index='date')
        """
        return self._order_by(fields, index)

    asc = order

    def desc(self, *fields, index=None):
        """
        Sort descending. Each field, and the index, is wrapped in a Desc
        marker unless it already carries an Asc or Desc marker.

        Usage:
            query.desc('name', index='date')
        """
        wrapped = [descending(f) for f in fields]
        return self._order_by(wrapped, None if index is None else descending(index))

    def _order_by(self, fields, index):
        if not fields and index is None:
            raise ValueError('reqlscope: a sort needs at least one field or an index')
        options = {} if index is None else {'index': index}
        self._conditions.append('order_by', *fields, **options)
        return self

    def all(self) -> list:
        """Fetch the documents in scope, deserialized by the collection."""
        return self.scoped().execute()

    def count(self) -> int:
        return self.scoped().count()

    def sum(self, field):
        """Sum of the field across documents in scope (0 when empty)."""
        return self.scoped().sum(field)

    def average(self, field):
        """Mean of the field across documents in scope (None when empty)."""
        return self.scoped().avg(field)

    avg = average

    def max(self, field):
        """Maximum value of the field. Documents without the field are ignored; None when empty."""
        return self.scoped().apply('has_fields', field).max(field)

    def min(self, field):
        """Minimum value of the field. Documents without the field are ignored; None when empty."""
        return self.scoped().apply('has_fields', field).min(field)

    def scoped(self):
        """
        Fold all conditions over the base collection.

        Idempotent; no documents are fetched.
        """
        logger.debug('resolving %d condition(s) over %r', len(self._conditions), self._collection)
        return fold(self._collection, self._conditions)

    def copy(self) -> 'Query':
        result = type(self)(self._collection, self._fragments)
        result._conditions = self._conditions.copy()
        return result

    def merge(self, other) -> 'Query':
        """
        Return a new query with this query's conditions followed by the
        other's. Neither input is modified.
        """
        if not isinstance(other, Query):
            raise TypeError(f'reqlscope: can only merge a Query, got {type(other).__name__}')
        result = self.copy()
        result._conditions.extend(other._conditions)
        return result

    def fragment(self, name, *args, **kwargs) -> 'Query':
        """Build the named fragment through the context and merge it in."""
        if self._fragments is None or not self._fragments.provides(name):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        other = self._fragments.fragment(name, *args, **kwargs)
        if not isinstance(other, Query):
            raise TypeError(f"reqlscope: fragment '{name}' returned {type(other).__name__}, expected Query")
        return self.merge(other)

    def __getattr__(self, name):
        # Only reached for names Query itself does not define.
        if name.startswith('_'):
            raise AttributeError(name)
        fragments = self._fragments
        if fragments is None or not fragments.provides(name):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        def call(*args, **kwargs):
            return self.fragment(name, *args, **kwargs)

        call.__name__ = name
        return call

    def empty(self) -> bool:
        return not self.all()

    def __iter__(self):
        return iter(self.all())

    def __str__(self):
        return str(self.all())

    def __repr__(self):
        return f'<Query {self._collection!r} {list(self._conditions)!r}>'


def query(collection, context=None, block=None):
    """
    Create a new query builder.

    Args:
        collection: base ScopedCollection to query
        context: optional object (or FragmentProvider) supplying named fragments
        block: optional callable receiving the new query, for initial conditions

    Returns:
        Query instance with fluent interface
    """
    return Query(collection, context, block)
