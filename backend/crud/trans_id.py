"""
Sequential `trans_id` assignment for journal entries.

Two strategies are available:

- ``max``: read the highest existing ``trans_id`` and add one. Two requests
  that read the maximum before either inserts get the same id, and the
  second insert fails on the unique constraint.
- ``sequence`` (default): advance a row in the ``counters`` table with a
  single ``UPDATE``. The row stays locked until the caller's transaction
  ends, so concurrent allocators are serialised. The new value is one past
  the larger of the counter and the stored maximum, so entries numbered by
  the ``max`` strategy or loaded from outside never sit ahead of it.

The counter row is created on first use with an insert that ignores an
existing row (``ON CONFLICT DO NOTHING``), so two first allocations racing
each other both end up updating the same row.

Neither strategy retries; database errors propagate to the caller.
"""

import logging

from sqlalchemy import case, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from models.counters import Counter
from models.journal_entry import JournalEntry

logger = logging.getLogger(__name__)

TRANS_ID_COUNTER = "journal_entries.trans_id"
STRATEGIES = ("sequence", "max")

_INSERT_CONSTRUCTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def next_trans_id_from_max(db: Session) -> int:
    """Return 1 for an empty table, otherwise the highest trans_id plus one."""
    last_entry = db.query(JournalEntry).order_by(JournalEntry.trans_id.desc()).first()
    logger.debug("Last journal entry: %s", last_entry.trans_id if last_entry else None)
    return last_entry.trans_id + 1 if last_entry else 1


def counter_insert_statement(dialect_name: str, name: str = TRANS_ID_COUNTER):
    """INSERT of a zeroed counter row that leaves an existing row alone."""
    try:
        insert = _INSERT_CONSTRUCTS[dialect_name]
    except KeyError:
        raise NotImplementedError(f"trans_id sequence is not supported on '{dialect_name}'")
    return insert(Counter).values(name=name, value=0).on_conflict_do_nothing(index_elements=[Counter.name])


def next_trans_id_from_sequence(db: Session) -> int:
    db.execute(counter_insert_statement(db.get_bind().dialect.name))

    stored_max = select(func.coalesce(func.max(JournalEntry.trans_id), 0)).scalar_subquery()
    db.execute(
        update(Counter)
        .where(Counter.name == TRANS_ID_COUNTER)
        .values(value=case((Counter.value >= stored_max, Counter.value), else_=stored_max) + 1)
        .execution_options(synchronize_session=False)
    )

    return db.query(Counter.value).filter(Counter.name == TRANS_ID_COUNTER).scalar()


def allocate_next_id(db: Session, strategy: str = "sequence") -> int:
    """
    Produce the trans_id for a journal entry about to be inserted.

    Must be called inside the transaction that inserts the entry.
    """
    if strategy == "sequence":
        trans_id = next_trans_id_from_sequence(db)
    elif strategy == "max":
        trans_id = next_trans_id_from_max(db)
    else:
        raise ValueError(f"Unknown trans_id strategy '{strategy}', expected one of {STRATEGIES}")

    logger.info("Allocated trans_id %s (%s)", trans_id, strategy)
    return trans_id


def current_trans_id(db: Session):
    """Last value handed out by the sequence, or None before the first allocation."""
    return db.query(Counter.value).filter(Counter.name == TRANS_ID_COUNTER).scalar()
