from typing import Optional
from .dialect import Dialect
from .errors import UnnamedTable
from .models import Index, PrimaryKey, Table


class IdentifierPolicy:
    """表、主键约束和索引的标识符规则"""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def table_name(self, table: Table) -> str:
        if not table.name:
            raise UnnamedTable("表未命名，请显式指定表名")
        return table.name

    def primary_key_name(self, table: Table, primary_key: PrimaryKey) -> str:
        return primary_key.name or f"PK_{self.table_name(table)}"

    def index_name(self, table: Table, index: Index) -> str:
        if index.name:
            return index.name
        return "_".join(["IX", self.table_name(table), *index.columns])

    def quote(self, identifier: str) -> str:
        q: Optional[str] = self.dialect.identifier_quote_char
        if not q:
            return identifier
        # 标识符内的引号字符需要成对转义
        return q + identifier.replace(q, q * 2) + q
