"""
RethinkDB-backed scoped collections.

Each condition chains the matching ReQL term; nothing reaches the server
until a terminal method runs the term on the connection.

Usage:
    conn = connect()
    users = ReqlTables(conn)
    query(users('users')).where(name='L').desc('age').all()
"""

import logging

from rethinkdb import RethinkDB

from .collection import ScopedCollection
from .conditions import Asc, Desc
from .config import settings as default_settings

logger = logging.getLogger(__name__)

r = RethinkDB()


def _reql_key(key):
    """Translate Asc/Desc markers into r.asc/r.desc terms."""
    if isinstance(key, Desc):
        return r.desc(key.field)
    if isinstance(key, Asc):
        return r.asc(key.field)
    return key


class ReqlCollection(ScopedCollection):
    """A ReQL term plus the connection it runs on."""

    def __init__(self, connection, term, deserialize=None):
        super().__init__(deserialize)
        self._connection = connection
        self._term = term

    @classmethod
    def table(cls, connection, name, deserialize=None):
        return cls(connection, r.table(name), deserialize)

    @property
    def term(self):
        return self._term

    def _scope(self, term):
        return ReqlCollection(self._connection, term, self._deserialize)

    def filter(self, predicate):
        return self._scope(self._term.filter(predicate))

    def pluck(self, *fields):
        return self._scope(self._term.pluck(*fields))

    def has_fields(self, *fields):
        return self._scope(self._term.has_fields(*fields))

    def limit(self, number):
        return self._scope(self._term.limit(number))

    def order_by(self, *keys, index=None):
        keys = [_reql_key(k) for k in keys]
        if index is None:
            return self._scope(self._term.order_by(*keys))
        return self._scope(self._term.order_by(*keys, index=_reql_key(index)))

    def count(self):
        return self._run(self._term.count())

    def sum(self, field):
        return self._run(self._term.sum(field))

    def avg(self, field):
        return self._run(self._term.avg(field).default(None))

    def max(self, field):
        return self._run(self._term.max(field)[field].default(None))

    def min(self, field):
        return self._run(self._term.min(field)[field].default(None))

    def execute(self):
        return self._deserialize(list(self._run(self._term)))

    def _run(self, term):
        logger.debug('running %s', term)
        return term.run(self._connection)

    def __repr__(self):
        return f'<ReqlCollection {self._term}>'


class ReqlTables:
    """Callable name -> base ReqlCollection over r.table(name)."""

    def __init__(self, connection, mappers=None):
        self.connection = connection
        self._mappers = dict(mappers or {})

    def __call__(self, name):
        return ReqlCollection.table(self.connection, name, self._mappers.get(name))


def connect(settings=None, **overrides):
    """
    Open a driver connection.

    Args:
        settings: a Settings instance, defaults to the environment settings
        **overrides: connect() keyword arguments that take precedence

    Returns:
        rethinkdb connection
    """
    options = (settings or default_settings).connection_options()
    options.update(overrides)
    logger.debug('connecting to rethinkdb at %s:%s/%s', options.get('host'), options.get('port'), options.get('db'))
    return r.connect(**options)
