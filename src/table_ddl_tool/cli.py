import click
from .config import DialectConfig
from .definition import load_tables
from .dialect import DIALECTS, get_dialect
from .service import SchemaService, render_tables
from .logger import get_logger

logger = get_logger(__name__)


@click.group()
def cli():
    """表结构定义与 DDL 生成工具"""
    pass


@cli.command()
@click.option('--schema', 'schema_path', required=True, help='表定义文件路径')
@click.option('--dialect', 'dialect_name', default='h2',
              type=click.Choice(sorted(DIALECTS)), help='SQL 方言')
@click.option('--quote', is_flag=True, default=False, help='为所有标识符加引号')
def render(schema_path: str, dialect_name: str, quote: bool):
    """打印建表和索引语句"""
    try:
        dialect = get_dialect(DialectConfig(name=dialect_name, quote_identifiers=quote))
        for statement in render_tables(load_tables(schema_path), dialect):
            line = f"{statement.sql};"
            if statement.parameters:
                line += f"  -- params: {statement.parameters!r}"
            click.echo(line)
    except Exception as e:
        logger.error(f"生成失败: {e}")
        click.echo(f"[ERROR] {e}", err=True)
        raise click.Abort()


@cli.command()
@click.option('--schema', 'schema_path', required=True, help='表定义文件路径')
@click.option('--config', default='config.yaml', help='配置文件路径')
def create(schema_path: str, config: str):
    """在数据库中创建缺失的表"""
    try:
        service = SchemaService(config)
        created = service.create_all(load_tables(schema_path))
        service.close()
        click.echo(f"[SUCCESS] 创建 {len(created)} 张表: {', '.join(created)}")
    except Exception as e:
        logger.error(f"建表失败: {e}")
        click.echo(f"[ERROR] {e}", err=True)
        raise click.Abort()


@cli.command()
@click.option('--table', 'table_name', required=True, help='表名')
@click.option('--config', default='config.yaml', help='配置文件路径')
def exists(table_name: str, config: str):
    """检查表是否存在"""
    try:
        service = SchemaService(config)
        found = service.exists(table_name)
        service.close()
        click.echo("true" if found else "false")
    except Exception as e:
        logger.error(f"查询失败: {e}")
        click.echo(f"[ERROR] {e}", err=True)
        raise click.Abort()


if __name__ == '__main__':
    cli()
