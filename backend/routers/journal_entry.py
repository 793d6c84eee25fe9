from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging

from config import Settings, get_settings
from database import get_db
from schemas.journal_entry import JournalEntry, JournalEntryCreate, JournalEntryUpdate
from crud import journal_entry as journal_entry_crud
from utils.auth_utils import get_current_user, get_user_identifier
from utils.object_id import is_valid_object_id

router = APIRouter(
    prefix="/journal",
    tags=["Journal Entries"],
)
logger = logging.getLogger(__name__)


def validate_entry_id(entry_id: str) -> str:
    # Checked before any storage access
    if not is_valid_object_id(entry_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid journal entry ID format")
    return entry_id


@router.post("", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
def create_journal_entry(
    entry: JournalEntryCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    user: dict = Depends(get_current_user)
):
    """
    Create a new journal entry. The trans_id is assigned by the server.
    """
    logger.info(f"Creating journal entry '{entry.description}' with {len(entry.lines)} line(s)")
    try:
        return journal_entry_crud.create_journal_entry(
            db=db,
            entry=entry,
            strategy=settings.trans_id_strategy,
            enforce_balance=settings.enforce_balance,
            user_id=get_user_identifier(user)
        )
    except journal_entry_crud.UnbalancedEntryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        # Includes trans_id unique violations under the "max" strategy
        logger.exception("Failed to create journal entry")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("", response_model=List[JournalEntry])
def get_journal_entries(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    skip: int = 0,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """
    Retrieve journal entries, most recent date first.
    """
    try:
        return journal_entry_crud.get_journal_entries(
            db=db,
            start_date=start_date,
            end_date=end_date,
            skip=skip,
            limit=limit
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to list journal entries")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{entry_id}", response_model=JournalEntry)
def get_journal_entry(
    entry_id: str = Depends(validate_entry_id),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """
    Retrieve a single journal entry by its storage ID.
    """
    logger.info(f"Looking for journal entry with ID: {entry_id}")
    try:
        db_entry = journal_entry_crud.get_journal_entry(db=db, entry_id=entry_id)
    except SQLAlchemyError as e:
        logger.exception(f"Error finding entry {entry_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    if db_entry is None:
        logger.info(f"No entry found for ID: {entry_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journal entry not found")
    return db_entry


@router.put("/{entry_id}", response_model=JournalEntry)
def update_journal_entry(
    entry_update: JournalEntryUpdate,
    entry_id: str = Depends(validate_entry_id),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    user: dict = Depends(get_current_user)
):
    try:
        updated = journal_entry_crud.update_journal_entry(
            db=db,
            entry_id=entry_id,
            entry_update=entry_update,
            enforce_balance=settings.enforce_balance,
            user_id=get_user_identifier(user)
        )
    except journal_entry_crud.UnbalancedEntryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        logger.exception(f"Error updating entry {entry_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journal entry not found")
    return updated


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_journal_entry(
    entry_id: str = Depends(validate_entry_id),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    try:
        deleted = journal_entry_crud.delete_journal_entry(db=db, entry_id=entry_id)
    except SQLAlchemyError as e:
        logger.exception(f"Error deleting entry {entry_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journal entry not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
