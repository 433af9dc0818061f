from typing import List
from .config import ConfigManager
from .database import SchemaDAO
from .ddl_generator import DDLGenerator
from .dialect import Dialect, get_dialect
from .models import Statement, Table
from .logger import get_logger

logger = get_logger(__name__)


def render_tables(tables: List[Table], dialect: Dialect) -> List[Statement]:
    """按表的声明顺序生成建表语句和索引语句"""
    generator = DDLGenerator(dialect)
    statements = []
    for table in tables:
        statements.append(generator.table_sql(table))
        statements.extend(generator.indices_sql(table))
    return statements


class SchemaService:
    def __init__(self, config_path: str = "config.yaml"):
        self.config_manager = ConfigManager(config_path)
        self.dialect = get_dialect(self.config_manager.get_dialect_config())
        self.dao = SchemaDAO(self.config_manager.get_database_config(), self.dialect)

    def render(self, tables: List[Table]) -> List[Statement]:
        logger.info(f"使用方言 {self.dialect.name} 生成 DDL，共 {len(tables)} 张表")
        return render_tables(tables, self.dialect)

    def create_all(self, tables: List[Table]) -> List[str]:
        """创建尚不存在的表，返回本次创建的表名"""
        # 先渲染全部表，任何一张表定义非法都不会执行建表
        self.render(tables)

        created = []
        for table in tables:
            logger.info(f"检查表: {table.name}")
            if self.dao.table_exists(table):
                logger.warning(f"表已存在，跳过: {table.name}")
                continue

            logger.info(f"创建表: {table.name}")
            try:
                self.dao.create_table(table)
            except Exception as e:
                logger.error(f"创建表失败: {table.name}: {e}")
                raise
            created.append(table.name)

        logger.info(f"创建完成，共 {len(created)} 张表")
        return created

    def exists(self, table_name: str) -> bool:
        return self.dao.table_exists(Table(name=table_name))

    def close(self):
        self.dao.close()

    def __del__(self):
        if hasattr(self, 'dao'):
            self.dao.close()
