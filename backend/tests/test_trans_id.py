import threading

import pytest
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from crud import journal_entry as journal_entry_crud
from crud.trans_id import (
    TRANS_ID_COUNTER,
    allocate_next_id,
    counter_insert_statement,
    current_trans_id,
    next_trans_id_from_max,
)
from database import Base, make_engine, make_session_factory
from models.counters import Counter
from models.journal_entry import JournalEntry
from schemas.journal_entry import JournalEntryCreate
from tests.conftest import make_entry


@pytest.fixture
def session_factory(tmp_path):
    # A file database so that separate sessions use separate connections
    engine = make_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    Base.metadata.create_all(bind=engine)
    yield make_session_factory(engine)
    engine.dispose()


def create(db, strategy="sequence", **kwargs):
    return journal_entry_crud.create_journal_entry(db, JournalEntryCreate(**make_entry(**kwargs)), strategy=strategy)


@pytest.mark.parametrize("strategy", ["sequence", "max"])
def test_first_entry_gets_trans_id_one(db, strategy):
    assert create(db, strategy=strategy).trans_id == 1


@pytest.mark.parametrize("strategy", ["sequence", "max"])
def test_sequential_creations_are_numbered_in_order(db, strategy):
    trans_ids = [create(db, strategy=strategy, description=f"entry {i}").trans_id for i in range(5)]
    assert trans_ids == [1, 2, 3, 4, 5]


def test_max_strategy_reads_highest_existing_id(db):
    db.add(JournalEntry(trans_id=41, description="imported"))
    db.commit()

    assert next_trans_id_from_max(db) == 42
    assert create(db, strategy="max").trans_id == 42


def test_sequence_is_seeded_from_existing_entries(db):
    db.add(JournalEntry(trans_id=7, description="imported"))
    db.commit()
    assert current_trans_id(db) is None

    assert create(db).trans_id == 8
    assert current_trans_id(db) == 8


def test_sequence_does_not_reuse_id_of_deleted_entry(db):
    create(db)
    last = create(db)
    journal_entry_crud.delete_journal_entry(db, last.id)

    assert create(db).trans_id == 3


def test_max_strategy_reuses_id_of_deleted_newest_entry(db):
    create(db, strategy="max")
    last = create(db, strategy="max")
    journal_entry_crud.delete_journal_entry(db, last.id)

    assert create(db, strategy="max").trans_id == 2


def test_unknown_strategy_is_rejected(db):
    with pytest.raises(ValueError):
        allocate_next_id(db, strategy="random")


def test_max_strategy_race_produces_duplicate_and_failed_insert(session_factory):
    first, second = session_factory(), session_factory()
    try:
        # Both requests read the maximum before either inserts
        first_id = allocate_next_id(first, strategy="max")
        second_id = allocate_next_id(second, strategy="max")
        assert first_id == second_id == 1

        first.add(JournalEntry(trans_id=first_id, description="first"))
        first.commit()

        second.add(JournalEntry(trans_id=second_id, description="second"))
        with pytest.raises(IntegrityError):
            second.commit()
        second.rollback()
    finally:
        first.close()
        second.close()

    check = session_factory()
    try:
        assert check.query(JournalEntry).count() == 1
    finally:
        check.close()


def test_sequence_allocation_waits_for_open_transaction(session_factory):
    first = session_factory()
    result = {}

    def create_in_second_session():
        second = session_factory()
        try:
            result["trans_id"] = create(second).trans_id
        except Exception as exc:
            result["error"] = exc
        finally:
            second.close()

    try:
        # Allocated but not yet inserted or committed
        first_id = allocate_next_id(first)
        worker = threading.Thread(target=create_in_second_session)
        worker.start()
        worker.join(timeout=0.5)
        assert worker.is_alive()

        first.add(JournalEntry(trans_id=first_id, description="first"))
        first.commit()
        worker.join(timeout=10)
    finally:
        first.close()

    assert not worker.is_alive()
    assert "error" not in result
    assert (first_id, result["trans_id"]) == (1, 2)


def test_sequence_continues_after_max_strategy_creation(db):
    trans_ids = [
        create(db, strategy="sequence").trans_id,
        create(db, strategy="max").trans_id,
        create(db, strategy="sequence").trans_id,
    ]
    assert trans_ids == [1, 2, 3]


def test_sequence_skips_past_entries_imported_after_seeding(db):
    create(db)
    db.add(JournalEntry(trans_id=10, description="imported"))
    db.commit()

    assert create(db).trans_id == 11
    assert current_trans_id(db) == 11


def test_existing_counter_row_is_not_reset(db):
    db.add(Counter(name=TRANS_ID_COUNTER, value=5))
    db.commit()

    assert create(db).trans_id == 6


@pytest.mark.parametrize("dialect_name", ["postgresql", "sqlite"])
def test_counter_row_insert_ignores_existing_row(dialect_name):
    dialect = {"postgresql": postgresql.dialect(), "sqlite": sqlite.dialect()}[dialect_name]
    sql = str(counter_insert_statement(dialect_name).compile(dialect=dialect))
    assert "ON CONFLICT (name) DO NOTHING" in sql


def test_counter_row_insert_rejects_unsupported_database():
    with pytest.raises(NotImplementedError):
        counter_insert_statement("mssql")


def test_rolled_back_allocation_is_returned_to_the_sequence(db):
    create(db)
    allocate_next_id(db)
    db.rollback()

    assert create(db).trans_id == 2
