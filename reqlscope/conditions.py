"""
Condition accumulation and the left fold that resolves it.

A condition is one recorded (operation, args, options) triple. Conditions are
applied strictly in insertion order; nothing is reordered, merged or dropped.

Usage:
    conditions = ConditionList()
    conditions.append('filter', {'name': 'L'})
    conditions.append('order_by', desc('age'))
    scope = fold(base_collection, conditions)
"""

from collections import namedtuple


Condition = namedtuple('Condition', ['operation', 'args', 'options'])


class Asc:
    """Ascending sort marker for a field name or index name."""

    def __init__(self, field):
        self.field = field

    def __eq__(self, other):
        return type(self) is type(other) and self.field == other.field

    def __hash__(self):
        return hash((type(self).__name__, self.field))

    def __repr__(self):
        return f'{type(self).__name__.lower()}({self.field!r})'


class Desc(Asc):
    """Descending sort marker for a field name or index name."""


def asc(field):
    return field if isinstance(field, Asc) else Asc(field)


def desc(field):
    """Wrap a field in a Desc marker. Fields already carrying a marker are kept as given."""
    return field if isinstance(field, Asc) else Desc(field)


class ConditionList:
    """Ordered, append-only sequence of conditions."""

    def __init__(self, conditions=()):
        self._conditions = [Condition(op, tuple(args), dict(options)) for op, args, options in conditions]

    def append(self, operation: str, *args, **options) -> 'ConditionList':
        self._conditions.append(Condition(operation, tuple(args), dict(options)))
        return self

    def extend(self, other) -> 'ConditionList':
        """Bulk-append the entries of another list, preserving their order."""
        self._conditions.extend(ConditionList(other)._conditions)
        return self

    def copy(self) -> 'ConditionList':
        return ConditionList(self)

    def __add__(self, other):
        if not isinstance(other, ConditionList):
            return NotImplemented
        return self.copy().extend(other)

    def __iter__(self):
        return iter(list(self._conditions))

    def __len__(self):
        return len(self._conditions)

    def __getitem__(self, index):
        return self._conditions[index]

    def __eq__(self, other):
        if isinstance(other, ConditionList):
            return self._conditions == other._conditions
        return NotImplemented

    def __repr__(self):
        return f'ConditionList({self._conditions!r})'


def fold(collection, conditions):
    """
    Apply each condition to the result of the previous one, starting from
    the given base collection.

    Args:
        collection: the unscoped base ScopedCollection
        conditions: iterable of Condition entries

    Returns:
        The fully scoped collection. Nothing is executed against the store.
    """
    scope = collection
    for operation, args, options in conditions:
        scope = scope.apply(operation, *args, **options)
    return scope
