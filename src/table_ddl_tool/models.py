from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ColumnType(FrozenModel):
    """列类型基类，每个子类在方言中对应一个类型 token"""


class IntegerType(ColumnType):
    pass


class LongType(ColumnType):
    pass


class VarcharType(ColumnType):
    length: int


class BooleanType(ColumnType):
    pass


class TextType(ColumnType):
    pass


class DecimalType(ColumnType):
    precision: int
    scale: int = 0


class DefaultExpression(FrozenModel):
    """原样输出的默认值表达式，如 CURRENT_TIMESTAMP"""
    sql: str


class Column(FrozenModel):
    name: str
    sql_type: ColumnType
    nullable: bool = False
    default: Optional[Union[bool, int, float, str, DefaultExpression]] = None
    auto_increment: bool = False


class PrimaryKey(FrozenModel):
    columns: List[str]
    name: Optional[str] = None


class Index(FrozenModel):
    columns: List[str]
    unique: bool = False
    name: Optional[str] = None


class Table(FrozenModel):
    name: Optional[str] = None
    columns: List[Column] = []
    constraints: List[Union[PrimaryKey, Index]] = []

    def column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None


class Statement(FrozenModel):
    """渲染后的 SQL 文本，parameters 按顺序对应 sql 中的占位符"""
    sql: str
    parameters: List[Any] = []


class RenderedConstraints(FrozenModel):
    primary_key: Optional[str] = None
    indices: List[Statement] = []
