"""Tests for the in-memory store and its RethinkDB operator semantics."""

import pytest

from reqlscope import Asc, Desc, MemoryStore


def names(documents):
    return [d.get('name') for d in documents]


@pytest.fixture
def people():
    store = MemoryStore()
    store.insert(
        'people',
        {'name': 'L', 'age': 32, 'city': 'Rome'},
        {'name': 'MG', 'age': 31, 'city': 'Milan'},
        {'name': 'S', 'city': 'Rome'},
        {'name': 'A', 'age': 31, 'city': None},
    )
    return store


class TestStore:
    def test_insert_assigns_ids(self):
        store = MemoryStore()
        stored = store.insert('people', {'name': 'L'}, {'name': 'MG'})
        assert all(isinstance(d['id'], str) for d in stored)
        assert stored[0]['id'] != stored[1]['id']

    def test_insert_keeps_given_id(self):
        store = MemoryStore()
        assert store.insert('people', {'id': 7, 'name': 'L'})[0]['id'] == 7

    def test_insert_does_not_alias_input(self):
        store = MemoryStore()
        doc = {'name': 'L', 'tags': ['a']}
        store.insert('people', doc)
        doc['tags'].append('b')
        assert store.collection('people').execute()[0]['tags'] == ['a']

    def test_clear(self, people):
        people.clear('people')
        assert people.collection('people').count() == 0
        assert people.names == []

    def test_names(self, people):
        people.insert('pets', {'name': 'Rex'})
        assert people.names == ['people', 'pets']

    def test_unknown_table_is_empty(self):
        assert MemoryStore().collection('nothing').execute() == []

    def test_mappers(self):
        store = MemoryStore(mappers={'people': lambda docs: [d['name'] for d in docs]})
        store.insert('people', {'name': 'L'})
        assert store('people').execute() == ['L']
        assert store.collection('people').execute()[0]['name'] == 'L'


class TestCollection:
    def test_conditions_are_lazy(self, people):
        calls = []

        def predicate(doc):
            calls.append(doc['name'])
            return True

        scope = people.collection('people').filter(predicate)
        assert calls == []
        scope.count()
        assert len(calls) == 4

    def test_condition_returns_new_collection(self, people):
        base = people.collection('people')
        scoped = base.filter({'city': 'Rome'})
        assert scoped is not base
        assert base.count() == 4
        assert scoped.count() == 2

    def test_filter_mapping_requires_field(self, people):
        assert names(people.collection('people').filter({'age': 31}).execute()) == ['MG', 'A']

    def test_filter_rejects_unevaluable_predicate(self, people):
        with pytest.raises(TypeError, match="cannot evaluate"):
            people.collection('people').filter(42)

    def test_filter_keeps_booleans_apart_from_numbers(self):
        store = MemoryStore()
        store.insert('flags', {'flag': True}, {'flag': 1}, {'flag': 1.0})
        flags = store.collection('flags')

        assert flags.filter({'flag': True}).count() == 1
        assert flags.filter({'flag': 1}).count() == 2

    def test_predicate_on_missing_nested_field_does_not_match(self):
        store = MemoryStore()
        store.insert('docs', {'meta': {'x': 1}}, {'meta': None}, {})
        scope = store.collection('docs').filter(lambda d: d['meta']['x'] == 1)
        assert scope.count() == 1

    def test_predicate_type_errors_propagate(self):
        store = MemoryStore()
        store.insert('people', {'age': 3}, {'age': 'x'})
        scope = store.collection('people').filter(lambda d: d['age'] + 1 > 0)

        with pytest.raises(TypeError):
            scope.count()

    def test_has_fields_treats_null_as_missing(self, people):
        assert names(people.collection('people').has_fields('city').execute()) == ['L', 'MG', 'S']

    def test_execute_returns_copies(self, people):
        collection = people.collection('people')
        collection.execute()[0]['name'] = 'changed'
        assert names(collection.execute())[0] == 'L'

    def test_apply_dispatches_by_name(self, people):
        scoped = people.collection('people').apply('limit', 1)
        assert scoped.count() == 1

    def test_apply_rejects_terminals(self, people):
        with pytest.raises(ValueError, match="unsupported condition operation 'count'"):
            people.collection('people').apply('count')


class TestOrdering:
    def test_missing_sorts_like_null_before_numbers(self, people):
        result = people.collection('people').order_by('age').execute()
        assert names(result) == ['S', 'MG', 'A', 'L']

    def test_ties_keep_insertion_order(self, people):
        result = people.collection('people').order_by(Desc('age')).execute()
        assert names(result) == ['L', 'MG', 'A', 'S']

    def test_multiple_keys(self, people):
        result = people.collection('people').has_fields('age').order_by('age', Desc('name')).execute()
        assert names(result) == ['MG', 'A', 'L']

    def test_index_sorts_before_keys(self, people):
        result = people.collection('people').has_fields('age').order_by('name', index=Desc('age')).execute()
        assert names(result) == ['L', 'A', 'MG']

    def test_callable_key(self, people):
        result = people.collection('people').order_by(Asc(lambda doc: len(doc['name']))).limit(2).execute()
        assert names(result) == ['L', 'S']

    def test_later_sort_supersedes_earlier(self, people):
        collection = people.collection('people').has_fields('age')
        twice = collection.order_by('name').order_by('age').execute()
        once = collection.order_by('age').execute()
        assert names(twice) == names(once) == ['MG', 'A', 'L']

    def test_mixed_types_follow_reql_order(self):
        store = MemoryStore()
        store.insert('values', *[{'v': v} for v in ['b', 3, None, True, [1], {'a': 1}, 1.5]])
        result = store.collection('values').order_by('v').pluck('v').execute()
        assert [d['v'] for d in result] == [[1], True, None, 1.5, 3, {'a': 1}, 'b']


class TestAggregates:
    def test_empty(self):
        collection = MemoryStore().collection('nothing')
        assert collection.count() == 0
        assert collection.sum('age') == 0
        assert collection.avg('age') is None
        assert collection.max('age') is None
        assert collection.min('age') is None

    def test_values(self, people):
        collection = people.collection('people')
        assert collection.sum('age') == 94
        assert collection.avg('age') == pytest.approx(94 / 3)
        assert collection.max('age') == 32
        assert collection.min('age') == 31

    def test_booleans_are_not_summed(self):
        store = MemoryStore()
        store.insert('scores', {'score': 2}, {'score': True}, {'score': 4})
        collection = store.collection('scores')
        assert collection.sum('score') == 6
        assert collection.avg('score') == 3
