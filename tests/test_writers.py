import pytest
from sqlalchemy import select, func, text
from sqlalchemy.exc import IntegrityError, OperationalError

from db import get_engine
from db.models import Client, Project
from import_engine import writers
from import_engine.row_processor import RowError
from import_engine.table_map import get_schema
from import_engine.writers import (
    ImportMode, InsertWriter, UpdateWriter, UpsertWriter, WriteOutcome,
    truncate_table, writer_for,
)


CLIENT = {"ID": "CLI0001", "Name": "ALBINI", "City": "Milano"}


def _count(session, model):
    return session.execute(select(func.count()).select_from(model)).scalar()


def test_mode_parse():
    assert ImportMode.parse("UPSERT") is ImportMode.UPSERT
    assert ImportMode.parse(ImportMode.UPDATE) is ImportMode.UPDATE
    with pytest.raises(ValueError, match="Unknown import mode"):
        ImportMode.parse("merge")


def test_writer_for_mode():
    schema = get_schema("CLIENTS")

    assert isinstance(writer_for("insert", schema), InsertWriter)
    assert isinstance(writer_for("update", schema), UpdateWriter)
    assert isinstance(writer_for(ImportMode.UPSERT, schema), UpsertWriter)


def test_insert_then_duplicate(session):
    writer = InsertWriter(get_schema("CLIENTS"))

    assert writer.write(session, CLIENT) is WriteOutcome.INSERTED
    session.commit()
    assert writer.write(session, {**CLIENT, "Name": "OTHER"}) is WriteOutcome.DUPLICATE
    session.commit()

    assert _count(session, Client) == 1
    assert session.get(Client, "CLI0001").Name == "ALBINI"


def test_insert_ignores_extra_columns(session):
    writer = InsertWriter(get_schema("CLIENTS"))

    writer.write(session, {**CLIENT, "Website": "example.com"})
    session.commit()

    assert session.get(Client, "CLI0001").City == "Milano"


def test_insert_foreign_key_violation_propagates(session):
    writer = InsertWriter(get_schema("PROJECTS"))

    with pytest.raises(IntegrityError):
        writer.write(session, {"ID": "COM0001", "Name": "Audit", "ClientID": "NOPE"})
    session.rollback()

    assert _count(session, Project) == 0


def test_empty_primary_key_is_row_error(session):
    writer = InsertWriter(get_schema("CLIENTS"))

    with pytest.raises(RowError):
        writer.write(session, {"ID": "", "Name": "Nobody"})


def test_update_existing_and_unmatched(session):
    InsertWriter(get_schema("CLIENTS")).write(session, CLIENT)
    session.commit()
    writer = UpdateWriter(get_schema("CLIENTS"))

    assert writer.write(session, {"ID": "CLI0001", "Name": "ALBINI SPA"}) is WriteOutcome.UPDATED
    assert writer.write(session, {"ID": "CLI0099", "Name": "Ghost"}) is WriteOutcome.UNMATCHED
    session.commit()

    assert session.get(Client, "CLI0001").Name == "ALBINI SPA"
    assert session.get(Client, "CLI0099") is None


def test_update_leaves_absent_columns_alone(session):
    InsertWriter(get_schema("CLIENTS")).write(session, CLIENT)
    session.commit()

    UpdateWriter(get_schema("CLIENTS")).write(session, {"ID": "CLI0001", "Name": "NEW"})
    session.commit()

    assert session.get(Client, "CLI0001").City == "Milano"


def test_upsert_inserts_then_updates(session):
    writer = UpsertWriter(get_schema("CLIENTS"))

    assert writer.write(session, CLIENT) is WriteOutcome.INSERTED
    session.commit()
    assert writer.write(session, {**CLIENT, "City": "Roma"}) is WriteOutcome.UPDATED
    session.commit()

    assert _count(session, Client) == 1
    assert session.get(Client, "CLI0001").City == "Roma"


def test_upsert_key_only_row(session):
    writer = UpsertWriter(get_schema("CLIENTS"))
    writer.write(session, CLIENT)
    session.commit()

    assert writer.write(session, {"ID": "CLI0001"}) is WriteOutcome.UPDATED


def test_truncate_with_dependent_rows(session):
    InsertWriter(get_schema("CLIENTS")).write(session, CLIENT)
    session.commit()
    InsertWriter(get_schema("PROJECTS")).write(
        session, {"ID": "COM0001", "Name": "Audit", "ClientID": "CLI0001"},
    )
    session.commit()

    removed = truncate_table(session, "CLIENTS")

    assert removed == 1
    assert _count(session, Client) == 0
    assert _count(session, Project) == 1


def test_truncate_restores_foreign_key_checks(session):
    truncate_table(session, "CLIENTS")

    with pytest.raises(IntegrityError):
        InsertWriter(get_schema("PROJECTS")).write(
            session, {"ID": "COM0002", "Name": "Orphan", "ClientID": "NOPE"},
        )
    session.rollback()


def _failing_delete(_table):
    raise OperationalError("DELETE", {}, Exception("disk I/O error"))


def test_truncate_failure_reraises_and_restores_foreign_keys(session, monkeypatch):
    InsertWriter(get_schema("CLIENTS")).write(session, CLIENT)
    session.commit()
    monkeypatch.setattr(writers, "delete", _failing_delete)

    with pytest.raises(OperationalError):
        truncate_table(session, "CLIENTS")

    with get_engine().connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
    assert _count(session, Client) == 1
