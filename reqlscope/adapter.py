"""
Adapter: fabricates queries for named collections.

Usage:
    adapter = Adapter(ReqlTables(connect()))
    adapter.query('users', block=lambda q: q.where(name='L')).all()
    adapter.find('users', user_id)
"""

from .query import Query


class Adapter:
    """
    Entry point for repository code.

    Args:
        collections: callable name -> base ScopedCollection
            (a MemoryStore or ReqlTables)
        identity: name of the identity field used by find()
    """

    def __init__(self, collections, identity='id'):
        self._collections = collections
        self.identity = identity

    def collection(self, name):
        return self._collections(name)

    def query(self, name, context=None, block=None) -> Query:
        """Fabricate a query over the named collection."""
        return Query(self.collection(name), context, block)

    def all(self, name) -> list:
        return self.query(name).all()

    def find(self, name, id_):
        """Return the document with the given identity, or None."""
        if id_ is None:
            return None
        result = self.query(name).where({self.identity: id_}).limit(1).all()
        return result[0] if result else None

    def first(self, name):
        """Not supported: RethinkDB has no sequential primary keys."""
        raise NotImplementedError

    def last(self, name):
        """Not supported: RethinkDB has no sequential primary keys."""
        raise NotImplementedError
