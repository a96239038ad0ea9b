"""Tests for environment-driven connection settings."""

import os

import pytest

from reqlscope import Settings, rethink, settings


@pytest.fixture
def configure(monkeypatch):
    def configure(**values):
        defaults = {
            'RETHINKDB_HOST': 'localhost',
            'RETHINKDB_PORT': 28015,
            'RETHINKDB_DB': 'test',
            'RETHINKDB_USER': 'admin',
            'RETHINKDB_PASSWORD': '',
            'RETHINKDB_TIMEOUT': 20,
        }
        defaults.update(values)
        for name, value in defaults.items():
            monkeypatch.setattr(Settings, name, value)
        return Settings()

    return configure


class TestSettings:
    def test_defaults(self, configure):
        options = configure().connection_options()
        assert options == {
            'host': 'localhost',
            'port': 28015,
            'db': 'test',
            'user': 'admin',
            'timeout': 20,
        }

    def test_overridden_values(self, configure):
        options = configure(
            RETHINKDB_HOST='db.internal',
            RETHINKDB_PORT=29015,
            RETHINKDB_DB='app',
            RETHINKDB_TIMEOUT=5,
        ).connection_options()
        assert options['host'] == 'db.internal'
        assert options['port'] == 29015
        assert options['db'] == 'app'
        assert options['timeout'] == 5

    def test_password_only_when_set(self, configure):
        assert 'password' not in configure().connection_options()
        assert configure(RETHINKDB_PASSWORD='secret').connection_options()['password'] == 'secret'

    def test_read_from_environment_at_import(self):
        assert Settings.RETHINKDB_HOST == os.environ.get('RETHINKDB_HOST', 'localhost')
        assert Settings.RETHINKDB_PORT == int(os.environ.get('RETHINKDB_PORT', '28015'))

    def test_module_instance_is_shared(self):
        assert isinstance(settings, Settings)
        assert rethink.default_settings is settings
