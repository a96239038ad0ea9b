"""The capability a Query folds its conditions over."""

CONDITION_OPERATIONS = frozenset(['filter', 'pluck', 'has_fields', 'limit', 'order_by'])


def _identity(documents):
    return list(documents)


class ScopedCollection:
    """
    A base collection with zero or more conditions already applied.

    Condition methods (filter, pluck, has_fields, limit, order_by) never
    mutate the receiver; they return a new scoped collection. Terminal
    methods (count, sum, avg, max, min, execute) run against the store.

    Subclasses implement every method below.
    """

    def __init__(self, deserialize=None):
        self._deserialize = deserialize or _identity

    def apply(self, operation: str, *args, **options) -> 'ScopedCollection':
        """Apply one condition operation by name and return the new scope."""
        if operation not in CONDITION_OPERATIONS:
            raise ValueError(f"reqlscope: unsupported condition operation '{operation}'")
        return getattr(self, operation)(*args, **options)

    def filter(self, predicate):
        raise NotImplementedError

    def pluck(self, *fields):
        raise NotImplementedError

    def has_fields(self, *fields):
        raise NotImplementedError

    def limit(self, number):
        raise NotImplementedError

    def order_by(self, *keys, index=None):
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def sum(self, field):
        raise NotImplementedError

    def avg(self, field):
        raise NotImplementedError

    def max(self, field):
        raise NotImplementedError

    def min(self, field):
        raise NotImplementedError

    def execute(self) -> list:
        """Fetch every document in scope and hand them to the deserializer."""
        raise NotImplementedError
