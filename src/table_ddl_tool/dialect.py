from typing import Dict, Optional, Type
from .config import DialectConfig
from .errors import UnsupportedType
from .models import (
    BooleanType, ColumnType, DecimalType, IntegerType, LongType, Statement,
    TextType, VarcharType,
)


class Dialect:
    """SQL 方言能力对象

    类型 token、标识符引号、自增写法、占位符以及表存在性查询都由方言提供，
    渲染器本身不做任何方言分支判断。
    """
    name = "generic"

    QUOTE_CHAR = '"'
    PLACEHOLDER = '?'
    AUTO_INCREMENT = 'AUTO_INCREMENT'
    AUTO_INCREMENT_TYPES = (IntegerType, LongType)
    # 自增列能否同时声明 DEFAULT
    AUTO_INCREMENT_WITH_DEFAULT = True

    TYPE_MAPPING: Dict[Type[ColumnType], str] = {
        IntegerType: 'INT',
        LongType: 'BIGINT',
        VarcharType: 'VARCHAR({length})',
        BooleanType: 'BOOLEAN',
        TextType: 'TEXT',
        DecimalType: 'DECIMAL({precision}, {scale})',
    }

    def __init__(self, quote_identifiers: bool = False,
                 inline_string_defaults: bool = False,
                 strict_auto_increment: bool = True):
        self.quote_identifiers = quote_identifiers
        self.inline_string_defaults = inline_string_defaults
        self.strict_auto_increment = strict_auto_increment

    @property
    def identifier_quote_char(self) -> Optional[str]:
        return self.QUOTE_CHAR if self.quote_identifiers else None

    @property
    def placeholder(self) -> str:
        return self.PLACEHOLDER

    def type_token(self, sql_type: ColumnType) -> str:
        template = self.TYPE_MAPPING.get(type(sql_type))
        if template is None:
            raise UnsupportedType(
                f"方言 {self.name} 不支持列类型: {type(sql_type).__name__}"
            )
        return template.format(**sql_type.model_dump())

    def allows_auto_increment(self, sql_type: ColumnType) -> bool:
        if not self.strict_auto_increment:
            return True
        return isinstance(sql_type, self.AUTO_INCREMENT_TYPES)

    def metadata_name(self, name: str) -> str:
        """元数据中保存的表名，未加引号的标识符按数据库规则折叠大小写"""
        return name

    def table_exists_query(self, name: str) -> Statement:
        return Statement(
            sql="SELECT EXISTS (SELECT 1 FROM information_schema.tables "
                f"WHERE table_name = {self.placeholder})",
            parameters=[self.metadata_name(name)],
        )


class H2Dialect(Dialect):
    name = "h2"

    TYPE_MAPPING = {**Dialect.TYPE_MAPPING, TextType: 'CLOB'}

    def metadata_name(self, name: str) -> str:
        return name if self.quote_identifiers else name.upper()

    def table_exists_query(self, name: str) -> Statement:
        return Statement(
            sql="SELECT COUNT(*) FROM INFORMATION_SCHEMA.TABLES WHERE TABLE_NAME = ?",
            parameters=[self.metadata_name(name)],
        )


class PostgresDialect(Dialect):
    name = "postgresql"

    PLACEHOLDER = '%s'
    AUTO_INCREMENT = 'GENERATED BY DEFAULT AS IDENTITY'
    AUTO_INCREMENT_WITH_DEFAULT = False

    def metadata_name(self, name: str) -> str:
        return name if self.quote_identifiers else name.lower()

    def table_exists_query(self, name: str) -> Statement:
        return Statement(
            sql="SELECT EXISTS (SELECT 1 FROM information_schema.tables "
                "WHERE table_schema = current_schema() AND table_name = %s)",
            parameters=[self.metadata_name(name)],
        )


class MySQLDialect(Dialect):
    name = "mysql"

    QUOTE_CHAR = '`'
    PLACEHOLDER = '%s'

    def table_exists_query(self, name: str) -> Statement:
        return Statement(
            sql="SELECT EXISTS (SELECT 1 FROM information_schema.tables "
                "WHERE table_schema = DATABASE() AND table_name = %s)",
            parameters=[name],
        )


DIALECTS: Dict[str, Type[Dialect]] = {
    H2Dialect.name: H2Dialect,
    PostgresDialect.name: PostgresDialect,
    MySQLDialect.name: MySQLDialect,
}


def get_dialect(config: DialectConfig) -> Dialect:
    dialect_cls = DIALECTS.get(config.name.lower())
    if dialect_cls is None:
        raise ValueError(f"未知的方言: {config.name}，可选: {', '.join(DIALECTS)}")
    return dialect_cls(
        quote_identifiers=config.quote_identifiers,
        inline_string_defaults=config.inline_string_defaults,
        strict_auto_increment=config.strict_auto_increment,
    )
