import logging
import psycopg2
from .config import DatabaseConfig
from .ddl_generator import DDLGenerator
from .dialect import Dialect, PostgresDialect
from .models import Statement, Table

logger = logging.getLogger(__name__)


class SchemaDAO:
    def __init__(self, config: DatabaseConfig, dialect: Dialect):
        # psycopg2 只能执行 PostgreSQL 方言生成的 SQL（%s 占位符）
        if not isinstance(dialect, PostgresDialect):
            raise ValueError(f"psycopg2 连接不支持方言: {dialect.name}，请使用 postgresql")
        self.config = config
        self.generator = DDLGenerator(dialect)
        self._conn = None

    def _get_connection(self):
        """获取数据库连接，带健康检查"""
        if not self._conn or self._conn.closed:
            self._conn = self._create_connection()
        else:
            try:
                with self._conn.cursor() as cur:
                    cur.execute("SELECT 1")
            except psycopg2.Error:
                self._conn = self._create_connection()
        return self._conn

    def _create_connection(self):
        return psycopg2.connect(
            host=self.config.host,
            port=self.config.port,
            database=self.config.database,
            user=self.config.user,
            password=self.config.password
        )

    def table_exists(self, table: Table) -> bool:
        return self.generator.exists(table, self._get_connection())

    def _execute(self, cur, statement: Statement) -> None:
        logger.debug(f"执行: {statement.sql} 参数: {statement.parameters}")
        # 无参数时不传参数，避免驱动解析 SQL 中的 %
        cur.execute(statement.sql, statement.parameters or None)

    def create_table(self, table: Table) -> None:
        """创建表及其索引，在同一个事务中提交"""
        # 先完成全部渲染，渲染失败时不执行任何语句
        statements = [self.generator.table_sql(table), *self.generator.indices_sql(table)]

        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                for statement in statements:
                    self._execute(cur, statement)
            conn.commit()
        except psycopg2.Error:
            conn.rollback()
            raise

    def drop_table(self, table: Table) -> None:
        statement = self.generator.drop_table_sql(table)
        conn = self._get_connection()
        with conn.cursor() as cur:
            self._execute(cur, statement)
        conn.commit()

    def close(self):
        if self._conn and not self._conn.closed:
            self._conn.close()
