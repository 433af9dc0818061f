import logging
from typing import Any, List, Set
from .column_renderer import ColumnRenderer
from .constraint_renderer import ConstraintRenderer
from .dialect import Dialect
from .errors import InvalidSchema
from .identifiers import IdentifierPolicy
from .models import Statement, Table

logger = logging.getLogger(__name__)


class DDLGenerator:
    """根据表模型和方言生成 DDL

    只负责生成 SQL 文本，不执行任何语句（exists 除外，它只做元数据查询）。
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.identifiers = IdentifierPolicy(dialect)
        self.column_renderer = ColumnRenderer(dialect, self.identifiers)
        self.constraint_renderer = ConstraintRenderer(dialect, self.identifiers)

    def table_sql(self, table: Table) -> Statement:
        table_name = self.identifiers.quote(self.identifiers.table_name(table))
        self._check_unique_columns(table)

        # 先渲染约束，保证约束非法时不会输出任何 SQL
        constraints = self.constraint_renderer.render_constraints(table)

        sql = f"CREATE TABLE IF NOT EXISTS {table_name}"
        if not table.columns:
            return Statement(sql=sql)

        definitions: List[str] = []
        parameters: List[Any] = []
        for column in table.columns:
            rendered = self.column_renderer.render_column(column)
            definitions.append(rendered.sql)
            parameters.extend(rendered.parameters)

        if constraints.primary_key:
            definitions.append(constraints.primary_key)

        statement = Statement(sql=f"{sql} ({', '.join(definitions)})", parameters=parameters)
        logger.debug(f"生成建表语句: {statement.sql}")
        return statement

    def indices_sql(self, table: Table) -> List[Statement]:
        self._check_unique_columns(table)
        return self.constraint_renderer.render_constraints(table).indices

    def drop_table_sql(self, table: Table) -> Statement:
        table_name = self.identifiers.quote(self.identifiers.table_name(table))
        return Statement(sql=f"DROP TABLE IF EXISTS {table_name}")

    def exists(self, table: Table, connection) -> bool:
        """查询数据库元数据判断表是否存在

        connection 为 DB-API 连接，查询失败时异常原样抛出
        """
        query = self.dialect.table_exists_query(self.identifiers.table_name(table))
        with connection.cursor() as cur:
            cur.execute(query.sql, query.parameters)
            row = cur.fetchone()
        return bool(row and row[0])

    def _check_unique_columns(self, table: Table) -> None:
        seen: Set[str] = set()
        for column in table.columns:
            if column.name in seen:
                raise InvalidSchema(f"表 {table.name} 中列名重复: {column.name}")
            seen.add(column.name)
