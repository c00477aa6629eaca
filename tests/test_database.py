import pytest

from rkit.database import Database, DatabaseError, DbType


@pytest.fixture
def db(tmp_path):
    database = Database()
    database.open(str(tmp_path / "data.sqlite"))
    yield database
    database.close()


def test_open_logs_success(tmp_path):
    logs = []
    with Database(on_log=logs.append) as database:
        database.open(str(tmp_path / "a.sqlite"))
        assert database.is_open
    assert logs[-1] == "sql open Ok"
    assert logs[0] == f"db name: {tmp_path / 'a.sqlite'}"


def test_context_manager_closes(tmp_path):
    with Database() as database:
        database.open(str(tmp_path / "a.sqlite"))
    assert not database.is_open


def test_open_failure_raises_and_logs(tmp_path):
    logs = []
    database = Database(on_log=logs.append)
    with pytest.raises(DatabaseError):
        database.open(str(tmp_path / "missing" / "a.sqlite"))
    assert logs[-1].startswith("ERROR: ")
    assert not database.is_open


def test_settings_table_created(db):
    assert db.get_table("Settings") == []
    assert db.db_type is DbType.SQLITE


def test_key_pair_round_trip(db):
    db.insert_key_pair("lang", "en")
    assert db.get_key_pair("lang") == "en"


def test_missing_key_is_empty(db):
    assert db.get_key_pair("nothing") == ""


def test_insert_key_pair_replaces(db):
    db.insert_key_pair("lang", "en")
    db.insert_key_pair("lang", "fr")
    assert db.get_key_pair("lang") == "fr"
    assert len(db.get_table("Settings")) == 1


def test_insert_key_pair_without_update_rejects_duplicate(db):
    db.insert_key_pair("lang", "en")
    with pytest.raises(DatabaseError):
        db.insert_key_pair("lang", "fr", update_existing=False)
    assert db.get_key_pair("lang") == "en"


def test_update_key_pair(db):
    db.insert_key_pair("mode", "a")
    db.update_key_pair("mode", "b")
    assert db.get_key_pair("mode") == "b"


def test_values_with_quotes_are_stored(db):
    db.insert_key_pair("note", "it's")
    assert db.get_key_pair("note") == "it's"


def test_execute_and_insert_and_get_table(db):
    db.execute("CREATE TABLE people (id TEXT, name TEXT)")
    db.insert("people", {"name": "ann", "id": "1"})
    db.insert("people", {"id": "2", "name": "bob"})
    assert db.get_table("people") == [["1", "ann"], ["2", "bob"]]


def test_bad_statement_raises(db):
    with pytest.raises(DatabaseError):
        db.execute("NOT A STATEMENT")


def test_get_table_unknown_raises(db):
    with pytest.raises(DatabaseError):
        db.get_table("no_such_table")


def test_closed_database_raises():
    database = Database()
    with pytest.raises(DatabaseError):
        database.get_key_pair("x")


def test_reopen_keeps_data(tmp_path):
    path = str(tmp_path / "p.sqlite")
    with Database() as database:
        database.open(path)
        database.insert_key_pair("k", "v")
    with Database() as database:
        database.open(path)
        assert database.get_key_pair("k") == "v"