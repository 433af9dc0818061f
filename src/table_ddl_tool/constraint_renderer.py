from typing import Optional, Set
from .dialect import Dialect
from .errors import DuplicateIndexName, InvalidSchema, MultiplePrimaryKeys
from .identifiers import IdentifierPolicy
from .models import Index, PrimaryKey, RenderedConstraints, Statement, Table


class ConstraintRenderer:
    def __init__(self, dialect: Dialect, identifiers: Optional[IdentifierPolicy] = None):
        self.dialect = dialect
        self.identifiers = identifiers or IdentifierPolicy(dialect)

    def render_constraints(self, table: Table) -> RenderedConstraints:
        """渲染主键子句（内联在 CREATE TABLE 中）和独立的 CREATE INDEX 语句

        索引语句按声明顺序输出
        """
        table_name = self.identifiers.quote(self.identifiers.table_name(table))

        primary_keys = [c for c in table.constraints if isinstance(c, PrimaryKey)]
        if len(primary_keys) > 1:
            raise MultiplePrimaryKeys(
                f"表 {table.name} 声明了 {len(primary_keys)} 个主键"
            )

        primary_key_clause = None
        if primary_keys:
            primary_key = primary_keys[0]
            self._check_columns(table, primary_key.columns, "主键")
            pk_name = self.identifiers.primary_key_name(table, primary_key)
            primary_key_clause = (
                f"CONSTRAINT {self.identifiers.quote(pk_name)} "
                f"PRIMARY KEY ({self._column_list(primary_key.columns)})"
            )

        indices = []
        seen_names: Set[str] = set()
        for index in table.constraints:
            if not isinstance(index, Index):
                continue
            self._check_columns(table, index.columns, "索引")
            index_name = self.identifiers.index_name(table, index)
            if index_name in seen_names:
                raise DuplicateIndexName(f"表 {table.name} 中索引名重复: {index_name}")
            seen_names.add(index_name)

            unique = "UNIQUE " if index.unique else ""
            indices.append(Statement(
                sql=f"CREATE {unique}INDEX {self.identifiers.quote(index_name)} "
                    f"ON {table_name} ({self._column_list(index.columns)})"
            ))

        return RenderedConstraints(primary_key=primary_key_clause, indices=indices)

    def _column_list(self, columns) -> str:
        return ", ".join(self.identifiers.quote(name) for name in columns)

    def _check_columns(self, table: Table, columns, kind: str) -> None:
        if not columns:
            raise InvalidSchema(f"表 {table.name} 的{kind}没有指定列")
        for name in columns:
            if table.column(name) is None:
                raise InvalidSchema(f"表 {table.name} 的{kind}引用了不存在的列: {name}")
