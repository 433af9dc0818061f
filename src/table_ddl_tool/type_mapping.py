from .dialect import Dialect
from .errors import InvalidSchema
from .models import ColumnType, DecimalType, VarcharType


class TypeMapper:
    def map_type(self, sql_type: ColumnType, dialect: Dialect) -> str:
        """将列类型映射为方言的 SQL 类型 token

        长度/精度非法时抛出 InvalidSchema，方言没有映射时抛出 UnsupportedType
        """
        if isinstance(sql_type, VarcharType) and sql_type.length <= 0:
            raise InvalidSchema(f"VARCHAR 长度必须为正数: {sql_type.length}")

        if isinstance(sql_type, DecimalType):
            if sql_type.precision <= 0:
                raise InvalidSchema(f"DECIMAL 精度必须为正数: {sql_type.precision}")
            if not 0 <= sql_type.scale <= sql_type.precision:
                raise InvalidSchema(
                    f"DECIMAL 小数位数必须在 0 到 {sql_type.precision} 之间: {sql_type.scale}"
                )

        return dialect.type_token(sql_type)
