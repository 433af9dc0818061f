import pytest
from unittest.mock import MagicMock, patch
import psycopg2
from table_ddl_tool.config import DatabaseConfig
from table_ddl_tool.database import SchemaDAO
from table_ddl_tool.definition import TableBuilder, integer, varchar
from table_ddl_tool.dialect import H2Dialect, PostgresDialect
from table_ddl_tool.errors import MultiplePrimaryKeys
from table_ddl_tool.models import PrimaryKey, Table


class TestSchemaDAO:
    """数据库访问测试"""

    @pytest.fixture
    def config(self):
        return DatabaseConfig(host="localhost", database="test", user="u", password="p")

    @pytest.fixture
    def dao(self, config, catalog_connection):
        with patch('table_ddl_tool.database.psycopg2.connect', return_value=catalog_connection):
            dao = SchemaDAO(config, PostgresDialect())
            yield dao

    @pytest.fixture
    def table(self):
        return (TableBuilder("T1")
                .column(integer("id"), primary_key=True)
                .column(varchar("name", 255, default="anon"), unique_index=True)
                .build())

    def test_rejects_non_postgres_dialect(self, config):
        with pytest.raises(ValueError, match="h2"):
            SchemaDAO(config, H2Dialect())

    def test_unregistered_table_not_exists(self, dao, table):
        assert dao.table_exists(table) is False

    def test_table_exists_after_create(self, dao, catalog_connection, table):
        assert dao.table_exists(table) is False

        dao.create_table(table)

        assert dao.table_exists(table) is True
        assert catalog_connection.commits == 1

    def test_create_executes_table_then_indices(self, dao, catalog_connection, table):
        dao.create_table(table)

        statements = [(sql, params) for sql, params in catalog_connection.executed
                      if sql.startswith("CREATE")]
        assert statements == [
            ("CREATE TABLE IF NOT EXISTS T1 (id INT NOT NULL, "
             "name VARCHAR(255) NOT NULL DEFAULT %s, CONSTRAINT PK_T1 PRIMARY KEY (id))",
             ["anon"]),
            ("CREATE UNIQUE INDEX IX_T1_name ON T1 (name)", None),
        ]

    def test_invalid_table_executes_nothing(self, dao, catalog_connection):
        table = Table(name="bad", columns=[integer("a")],
                      constraints=[PrimaryKey(columns=["a"]), PrimaryKey(columns=["a"])])

        with pytest.raises(MultiplePrimaryKeys):
            dao.create_table(table)
        assert catalog_connection.executed == []

    def test_drop_table(self, dao, table):
        dao.create_table(table)

        dao.drop_table(table)

        assert dao.table_exists(table) is False

    def test_driver_error_rolls_back(self, config, table):
        connection = MagicMock()
        connection.closed = False
        cursor = connection.cursor.return_value.__enter__.return_value
        cursor.execute.side_effect = psycopg2.ProgrammingError("syntax error")

        with patch('table_ddl_tool.database.psycopg2.connect', return_value=connection):
            dao = SchemaDAO(config, PostgresDialect())
            with pytest.raises(psycopg2.ProgrammingError):
                dao.create_table(table)

        connection.rollback.assert_called_once()
        connection.commit.assert_not_called()

    def test_reconnect_when_closed(self, config, table):
        first, second = MagicMock(closed=False), MagicMock(closed=False)

        with patch('table_ddl_tool.database.psycopg2.connect',
                   side_effect=[first, second]) as mock_connect:
            dao = SchemaDAO(config, PostgresDialect())
            dao.table_exists(table)
            first.closed = True
            dao.table_exists(table)

        assert mock_connect.call_count == 2

    def test_close(self, dao, catalog_connection, table):
        dao.table_exists(table)

        dao.close()

        assert catalog_connection.closed is True
