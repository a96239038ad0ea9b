"""
Connection settings, read from environment variables.

Usage:
    from reqlscope.config import settings
    conn = r.connect(**settings.connection_options())
"""

import os


class Settings:
    """RethinkDB connection settings from environment variables."""

    RETHINKDB_HOST: str = os.environ.get("RETHINKDB_HOST", "localhost")
    RETHINKDB_PORT: int = int(os.environ.get("RETHINKDB_PORT", "28015"))
    RETHINKDB_DB: str = os.environ.get("RETHINKDB_DB", "test")
    RETHINKDB_USER: str = os.environ.get("RETHINKDB_USER", "admin")
    RETHINKDB_PASSWORD: str = os.environ.get("RETHINKDB_PASSWORD", "")
    RETHINKDB_TIMEOUT: int = int(os.environ.get("RETHINKDB_TIMEOUT", "20"))

    def connection_options(self) -> dict:
        """Keyword arguments for the driver's connect(). An empty password is left out."""
        options = {
            "host": self.RETHINKDB_HOST,
            "port": self.RETHINKDB_PORT,
            "db": self.RETHINKDB_DB,
            "user": self.RETHINKDB_USER,
            "timeout": self.RETHINKDB_TIMEOUT,
        }
        if self.RETHINKDB_PASSWORD:
            options["password"] = self.RETHINKDB_PASSWORD
        return options


settings = Settings()
