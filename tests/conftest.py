import pytest

from db import init_db, get_session
from main import create_app


CLIENT_HEADER = "ID,Name,LegalName,Address,City,PostalCode,Province,TaxID"
CLIENT_ROW = "CLI0001,ALBINI,ALBINI SRL,Via Roma 1,Milano,20100,MI,12345678901"


@pytest.fixture
def db_url(tmp_path):
    """Initialise a fresh sqlite database for each test."""
    url = f"sqlite:///{tmp_path / 'ctdb-test.sqlite'}"
    init_db(url)
    return url


@pytest.fixture
def session(db_url):
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "Data"
    d.mkdir()
    return d


@pytest.fixture
def write_table(data_dir):
    """Write <TABLE><ext> into the data directory from a list of lines."""
    def _write(table, lines, ext=".csv", encoding="utf-8"):
        path = data_dir / f"{table}{ext}"
        path.write_text("\n".join(lines) + "\n", encoding=encoding)
        return path
    return _write


@pytest.fixture
def app(tmp_path, data_dir):
    app = create_app({
        "TESTING": True,
        "CTDB_DB_URL": f"sqlite:///{tmp_path / 'ctdb-app.sqlite'}",
        "CTDB_DATA_DIR": data_dir,
    })
    yield app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()
