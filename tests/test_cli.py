"""Management CLI tests against a throwaway SQLite file."""

import pytest
from sqlalchemy import create_engine, text

from grainbroker import cli


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'grainbroker.db'}"


@pytest.mark.unit
class TestCli:
    def test_create_tables(self, sqlite_url):
        assert cli.create_tables(sqlite_url) == ["customers", "orders", "suppliers"]

    def test_table_counts(self, sqlite_url):
        cli.create_tables(sqlite_url)
        engine = create_engine(sqlite_url)
        with engine.begin() as conn:
            conn.execute(text("INSERT INTO customers (id, location) VALUES (lower(hex(randomblob(16))), 'Chicago, IL')"))
        engine.dispose()

        assert cli.table_counts(sqlite_url) == {"customers": 1, "suppliers": 0, "orders": 0}

    def test_unknown_command_prints_usage(self, capsys):
        assert cli.main(["frobnicate"]) == 1
        assert "Usage" in capsys.readouterr().out
