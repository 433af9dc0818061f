class DDLError(ValueError):
    """DDL 渲染失败的基类"""


class UnnamedTable(DDLError):
    """表没有名称，无法生成标识符"""


class UnsupportedType(DDLError):
    """方言不支持该列类型"""


class InvalidSchema(DDLError):
    """表结构定义非法，例如 VARCHAR 长度不为正数"""


class InvalidColumn(DDLError):
    """列属性组合非法，例如非整数列自增"""


class MultiplePrimaryKeys(DDLError):
    pass


class DuplicateIndexName(DDLError):
    pass
