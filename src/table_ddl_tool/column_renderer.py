import math
from typing import Any, List, Optional, Tuple
from .dialect import Dialect
from .errors import InvalidColumn
from .identifiers import IdentifierPolicy
from .models import Column, DefaultExpression, Statement
from .type_mapping import TypeMapper


class ColumnRenderer:
    def __init__(self, dialect: Dialect, identifiers: Optional[IdentifierPolicy] = None,
                 type_mapper: Optional[TypeMapper] = None):
        self.dialect = dialect
        self.identifiers = identifiers or IdentifierPolicy(dialect)
        self.type_mapper = type_mapper or TypeMapper()

    def render_column(self, column: Column) -> Statement:
        """渲染单列定义子句

        顺序：列名、类型、NULL/NOT NULL、自增、默认值。
        字符串默认值以占位符输出，其值放入 Statement.parameters。
        """
        if column.auto_increment and not self.dialect.allows_auto_increment(column.sql_type):
            raise InvalidColumn(
                f"列 {column.name} 的类型 {type(column.sql_type).__name__} 不支持自增"
            )
        if (column.auto_increment and column.default is not None
                and not self.dialect.AUTO_INCREMENT_WITH_DEFAULT):
            raise InvalidColumn(f"方言 {self.dialect.name} 不允许自增列 {column.name} 设置默认值")

        parts = [
            self.identifiers.quote(column.name),
            self.type_mapper.map_type(column.sql_type, self.dialect),
            "NULL" if column.nullable else "NOT NULL",
        ]
        if column.auto_increment:
            parts.append(self.dialect.AUTO_INCREMENT)

        parameters: List[Any] = []
        if column.default is not None:
            literal, parameters = self._render_default(column)
            parts.append(f"DEFAULT {literal}")

        return Statement(sql=" ".join(parts), parameters=parameters)

    def _render_default(self, column: Column) -> Tuple[str, List[Any]]:
        value = column.default

        if isinstance(value, DefaultExpression):
            return value.sql, []

        # bool 是 int 的子类，必须先判断
        if isinstance(value, bool):
            return self.dialect.placeholder, [value]

        if isinstance(value, (int, float)):
            if not math.isfinite(value):
                raise InvalidColumn(f"列 {column.name} 的默认值不是有限数值: {value}")
            return str(value), []

        if self.dialect.inline_string_defaults:
            return "'" + str(value).replace("'", "''") + "'", []
        return self.dialect.placeholder, [value]
