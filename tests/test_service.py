import pytest
from unittest.mock import patch
from table_ddl_tool.definition import TableBuilder, integer
from table_ddl_tool.errors import UnnamedTable
from table_ddl_tool.service import SchemaService


class TestSchemaService:
    """建表服务测试"""

    @pytest.fixture
    def service(self, tmp_path, catalog_connection):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "database: {host: localhost, database: app, user: u, password: p}\n"
            "dialect: {name: postgresql}\n",
            encoding='utf-8'
        )
        with patch('table_ddl_tool.database.psycopg2.connect', return_value=catalog_connection):
            yield SchemaService(str(config_file))

    @pytest.fixture
    def tables(self):
        return [
            TableBuilder("a").column(integer("id"), primary_key=True).build(),
            TableBuilder("b").column(integer("id"), index=True).build(),
        ]

    def test_render(self, service, tables):
        statements = service.render(tables)

        assert [s.sql for s in statements] == [
            "CREATE TABLE IF NOT EXISTS a (id INT NOT NULL, CONSTRAINT PK_a PRIMARY KEY (id))",
            "CREATE TABLE IF NOT EXISTS b (id INT NOT NULL)",
            "CREATE INDEX IX_b_id ON b (id)",
        ]

    def test_create_all_skips_existing(self, service, catalog_connection, tables):
        catalog_connection.tables.add("a")

        created = service.create_all(tables)

        assert created == ["b"]
        assert service.exists("b") is True

    def test_create_all_validates_before_executing(self, service, catalog_connection, tables):
        with pytest.raises(UnnamedTable):
            service.create_all(tables + [TableBuilder().build()])
        assert catalog_connection.executed == []

    @pytest.mark.parametrize("dialect_name", ["h2", "mysql"])
    def test_rejects_dialect_psycopg2_cannot_run(self, tmp_path, dialect_name):
        """psycopg2 只接受 PostgreSQL 方言，? 占位符和 H2/MySQL 语法不会发到驱动"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "database: {host: localhost, database: app, user: u, password: p}\n"
            f"dialect: {{name: {dialect_name}}}\n",
            encoding='utf-8'
        )

        with patch('table_ddl_tool.database.psycopg2.connect') as mock_connect:
            with pytest.raises(ValueError, match=dialect_name):
                SchemaService(str(config_file))

        mock_connect.assert_not_called()

    def test_exists(self, service):
        assert service.exists("missing") is False
