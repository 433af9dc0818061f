from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union
import yaml
from .errors import InvalidSchema, UnsupportedType
from .models import (
    BooleanType, Column, ColumnType, DecimalType, DefaultExpression, Index,
    IntegerType, LongType, PrimaryKey, Table, TextType, VarcharType,
)


def integer(name: str, **kwargs) -> Column:
    return Column(name=name, sql_type=IntegerType(), **kwargs)


def long(name: str, **kwargs) -> Column:
    return Column(name=name, sql_type=LongType(), **kwargs)


def varchar(name: str, length: int, **kwargs) -> Column:
    return Column(name=name, sql_type=VarcharType(length=length), **kwargs)


def boolean(name: str, **kwargs) -> Column:
    return Column(name=name, sql_type=BooleanType(), **kwargs)


def text(name: str, **kwargs) -> Column:
    return Column(name=name, sql_type=TextType(), **kwargs)


def decimal(name: str, precision: int, scale: int = 0, **kwargs) -> Column:
    return Column(name=name, sql_type=DecimalType(precision=precision, scale=scale), **kwargs)


class TableBuilder:
    """显式构建表模型

    列上标记的 primary_key 合并为一个（可能是复合的）主键，
    index / unique_index 传入字符串时作为显式索引名。
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self._columns: List[Column] = []
        self._primary_key_columns: List[str] = []
        self._constraints: List[Union[PrimaryKey, Index]] = []

    def column(self, column: Column, primary_key: bool = False,
               index: Union[bool, str] = False,
               unique_index: Union[bool, str] = False) -> "TableBuilder":
        self._columns.append(column)
        if primary_key:
            self._primary_key_columns.append(column.name)
        if index:
            self.index(column.name, name=index if isinstance(index, str) else None)
        if unique_index:
            self.unique_index(column.name,
                              name=unique_index if isinstance(unique_index, str) else None)
        return self

    def primary_key(self, *columns: str, name: Optional[str] = None) -> "TableBuilder":
        self._constraints.append(PrimaryKey(columns=list(columns), name=name))
        return self

    def index(self, *columns: str, name: Optional[str] = None,
              unique: bool = False) -> "TableBuilder":
        self._constraints.append(Index(columns=list(columns), name=name, unique=unique))
        return self

    def unique_index(self, *columns: str, name: Optional[str] = None) -> "TableBuilder":
        return self.index(*columns, name=name, unique=True)

    def build(self) -> Table:
        constraints = list(self._constraints)
        if self._primary_key_columns:
            constraints.insert(0, PrimaryKey(columns=list(self._primary_key_columns)))
        return Table(name=self.name, columns=list(self._columns), constraints=constraints)


TYPE_NAMES: Dict[str, Type[ColumnType]] = {
    'integer': IntegerType,
    'int': IntegerType,
    'long': LongType,
    'bigint': LongType,
    'varchar': VarcharType,
    'boolean': BooleanType,
    'text': TextType,
    'decimal': DecimalType,
}


def _parse_column(spec: Dict[str, Any]) -> Column:
    if not spec.get('name'):
        raise InvalidSchema(f"列定义缺少 name: {spec}")

    type_name = str(spec.get('type', '')).lower()
    type_cls = TYPE_NAMES.get(type_name)
    if type_cls is None:
        raise UnsupportedType(f"未知的列类型: {spec.get('type')}")

    type_args = {k: spec[k] for k in type_cls.model_fields if k in spec}
    missing = [k for k, f in type_cls.model_fields.items() if f.is_required() and k not in spec]
    if missing:
        raise InvalidSchema(f"列 {spec.get('name')} 缺少类型参数: {', '.join(missing)}")

    default = spec.get('default')
    if 'default_expression' in spec:
        default = DefaultExpression(sql=spec['default_expression'])

    return Column(
        name=spec['name'],
        sql_type=type_cls(**type_args),
        nullable=spec.get('nullable', False),
        default=default,
        auto_increment=spec.get('auto_increment', False),
    )


def _constraint_columns(table_spec: Dict[str, Any], spec: Dict[str, Any], kind: str) -> List[str]:
    columns = spec.get('columns')
    if not columns:
        raise InvalidSchema(f"表 {table_spec.get('name')} 的{kind}缺少 columns")
    return list(columns)


def parse_table(spec: Dict[str, Any]) -> Table:
    builder = TableBuilder(spec.get('name'))
    for column_spec in spec.get('columns') or []:
        builder.column(
            _parse_column(column_spec),
            primary_key=column_spec.get('primary_key', False),
            index=column_spec.get('index', False),
            unique_index=column_spec.get('unique_index', False),
        )

    primary_key = spec.get('primary_key')
    if primary_key:
        builder.primary_key(*_constraint_columns(spec, primary_key, "主键"),
                            name=primary_key.get('name'))

    for index_spec in spec.get('indices') or []:
        builder.index(*_constraint_columns(spec, index_spec, "索引"), name=index_spec.get('name'),
                      unique=index_spec.get('unique', False))

    return builder.build()


def load_tables(file_path: str) -> List[Table]:
    """从 YAML 文件加载表定义"""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"文件不存在: {file_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return [parse_table(spec) for spec in data.get('tables') or []]
