from sqlalchemy.orm import Session, selectinload
from models import journal_entry as journal_entry_model
from models import journal_line as journal_line_model
from models import journal_attachment as journal_attachment_model
from schemas.journal_entry import JournalEntryCreate, JournalEntryUpdate
from crud.trans_id import allocate_next_id
from typing import Optional
from datetime import datetime
from decimal import Decimal
import logging

logger = logging.getLogger(__name__)


class UnbalancedEntryError(Exception):
    """Raised when an entry's debits and credits differ."""


def check_entry_balanced(lines):
    """
    Balance rule: the debits of an entry must add up to its credits.
    Only applied when the application is configured to enforce it.
    """
    total_debit = sum((Decimal(line.debit) for line in lines), Decimal("0"))
    total_credit = sum((Decimal(line.credit) for line in lines), Decimal("0"))
    if total_debit != total_credit:
        raise UnbalancedEntryError('The sum of debits must equal the sum of credits.')


def _build_lines(lines):
    return [
        journal_line_model.JournalLine(position=position, **line.model_dump())
        for position, line in enumerate(lines)
    ]


def _build_attachments(attachments):
    return [
        journal_attachment_model.JournalAttachment(position=position, **attachment.model_dump())
        for position, attachment in enumerate(attachments)
    ]


def create_journal_entry(
    db: Session,
    entry: JournalEntryCreate,
    strategy: str = "sequence",
    enforce_balance: bool = False,
    user_id: Optional[str] = None
):
    """
    Creates a new journal entry with its lines and attachments.
    The trans_id is allocated in the same transaction as the insert.
    """
    if enforce_balance:
        check_entry_balanced(entry.lines)

    try:
        trans_id = allocate_next_id(db, strategy=strategy)

        db_entry = journal_entry_model.JournalEntry(
            trans_id=trans_id,
            description=entry.description,
            lines=_build_lines(entry.lines),
            attachments=_build_attachments(entry.attachments),
            created_by=user_id,
        )
        if entry.date is not None:
            db_entry.date = entry.date
        db.add(db_entry)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(db_entry)
    logger.info("Created journal entry trans_id=%s id=%s", db_entry.trans_id, db_entry.id)
    return db_entry


def get_journal_entry(db: Session, entry_id: str):
    """
    Retrieves a single journal entry by its storage ID.
    """
    return db.query(journal_entry_model.JournalEntry).options(
        selectinload(journal_entry_model.JournalEntry.lines),
        selectinload(journal_entry_model.JournalEntry.attachments),
    ).filter(
        journal_entry_model.JournalEntry.id == entry_id
    ).first()


def get_journal_entries(
    db: Session,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    skip: int = 0,
    limit: Optional[int] = None
):
    """
    Retrieves journal entries, newest date first, with optional date filtering.
    """
    query = db.query(journal_entry_model.JournalEntry).options(
        selectinload(journal_entry_model.JournalEntry.lines),
        selectinload(journal_entry_model.JournalEntry.attachments),
    )

    if start_date:
        query = query.filter(journal_entry_model.JournalEntry.date >= start_date)
    if end_date:
        query = query.filter(journal_entry_model.JournalEntry.date <= end_date)

    query = query.order_by(
        journal_entry_model.JournalEntry.date.desc(),
        journal_entry_model.JournalEntry.trans_id.desc()
    ).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def update_journal_entry(
    db: Session,
    entry_id: str,
    entry_update: JournalEntryUpdate,
    enforce_balance: bool = False,
    user_id: Optional[str] = None
):
    """
    Applies a partial update. Lines and attachments, when present, replace the
    stored lists. The trans_id is never changed.
    """
    db_entry = get_journal_entry(db, entry_id)
    if not db_entry:
        return None

    if enforce_balance and entry_update.lines is not None:
        check_entry_balanced(entry_update.lines)

    update_data = entry_update.model_dump(exclude_unset=True, exclude={"lines", "attachments"})
    for key, value in update_data.items():
        if key == "date" and value is None:
            continue
        setattr(db_entry, key, value)

    if entry_update.lines is not None:
        db_entry.lines = _build_lines(entry_update.lines)
    if entry_update.attachments is not None:
        db_entry.attachments = _build_attachments(entry_update.attachments)
    db_entry.updated_by = user_id

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_entry)
    logger.info("Updated journal entry trans_id=%s id=%s", db_entry.trans_id, db_entry.id)
    return db_entry


def delete_journal_entry(db: Session, entry_id: str):
    db_entry = get_journal_entry(db, entry_id)
    if not db_entry:
        return False

    trans_id = db_entry.trans_id
    db.delete(db_entry)
    db.commit()
    logger.info("Deleted journal entry trans_id=%s id=%s", trans_id, entry_id)
    return True


def count_journal_entries(db: Session) -> int:
    return db.query(journal_entry_model.JournalEntry).count()
