import pytest


class FakeCatalogCursor:
    def __init__(self, connection):
        self.connection = connection
        self._row = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.connection.executed.append((sql, params))
        if sql.startswith("CREATE TABLE IF NOT EXISTS "):
            self.connection.tables.add(sql.split()[5].strip('"`').lower())
        elif sql.startswith("DROP TABLE IF EXISTS "):
            self.connection.tables.discard(sql.split()[4].strip('"`').lower())
        elif "information_schema.tables" in sql.lower():
            self._row = (params[0].lower() in self.connection.tables,)
        else:
            self._row = (1,)

    def fetchone(self):
        return self._row


class FakeCatalogConnection:
    """记录已创建表的内存连接"""

    def __init__(self):
        self.tables = set()
        self.executed = []
        self.closed = False
        self.commits = 0

    def cursor(self):
        return FakeCatalogCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        pass

    def close(self):
        self.closed = True


@pytest.fixture
def catalog_connection():
    return FakeCatalogConnection()
