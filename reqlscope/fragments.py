"""
Query fragments supplied by an owning context.

A context (typically a repository class) defines named factory methods that
each return a Query. A query built with that context can call those names as
if they were its own chain methods; the fragment's conditions are appended.

Usage:
    class ArticleRepository:
        @classmethod
        def by_author(cls, author):
            return adapter.query('articles', cls).where(author_id=author['id'])

        @classmethod
        def rank(cls):
            return adapter.query('articles', cls).desc('comments_count')

    ArticleRepository.rank().by_author(author).all()
"""


class FragmentProvider:
    """Looks up named query fragments."""

    def provides(self, name: str) -> bool:
        raise NotImplementedError

    def fragment(self, name: str, *args, **kwargs):
        """Build the named fragment. Returns a Query, or None when not provided."""
        raise NotImplementedError


def _defines(context, name):
    """True when name is defined by the context itself or its classes, not by object or type."""
    owners = list(type(context).__mro__)
    if isinstance(context, type):
        owners = list(context.__mro__) + owners
    else:
        owners.insert(0, context)
    return any(
        name in getattr(owner, '__dict__', {})
        for owner in owners
        if owner is not object and owner is not type
    )


class ContextFragments(FragmentProvider):
    """Fragments are the public callables of an arbitrary context object."""

    def __init__(self, context):
        self.context = context

    def provides(self, name):
        if not name or name.startswith('_'):
            return False
        if not _defines(self.context, name):
            return False
        return callable(getattr(self.context, name, None))

    def fragment(self, name, *args, **kwargs):
        if not self.provides(name):
            return None
        return getattr(self.context, name)(*args, **kwargs)

    def __repr__(self):
        return f'ContextFragments({self.context!r})'


def fragment_provider(context):
    """Coerce a context into a FragmentProvider (None stays None)."""
    if context is None or isinstance(context, FragmentProvider):
        return context
    return ContextFragments(context)
