import yaml
from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    host: str
    port: int = 5432
    database: str
    user: str
    password: str


class DialectConfig(BaseModel):
    """SQL 方言配置"""
    name: str = "postgresql"
    quote_identifiers: bool = False
    # 字符串默认值默认以占位符绑定，开启后内联为转义后的字面量
    inline_string_defaults: bool = False
    # 关闭后允许非整数列使用自增
    strict_auto_increment: bool = True


class ConfigManager:
    def __init__(self, config_path: str = "config.yaml"):
        self.config_path = config_path
        self._config = None

    def _load(self) -> dict:
        if not self._config:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
        return self._config

    def get_database_config(self) -> DatabaseConfig:
        return DatabaseConfig(**self._load()['database'])

    def get_dialect_config(self) -> DialectConfig:
        """获取方言配置，未配置时使用默认值"""
        return DialectConfig(**(self._load().get('dialect') or {}))
