from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from database import get_db
from crud.accounts import count_accounts
from crud.journal_entry import count_journal_entries
from crud.trans_id import current_trans_id, next_trans_id_from_max
from utils.auth_utils import get_current_user

router = APIRouter(prefix="/debug", tags=["Debug"])
logger = logging.getLogger(__name__)


@router.get("/collections")
def inspect_collections(db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    """Overview of the storage the API is connected to."""
    try:
        tables = sorted(inspect(db.get_bind()).get_table_names())
        result = {
            "availableCollections": tables,
            "database": db.get_bind().url.database,
            "journalEntryCount": count_journal_entries(db),
            "accountCount": count_accounts(db),
            "transIdCounter": current_trans_id(db),
            "nextTransIdFromMax": next_trans_id_from_max(db),
        }
    except SQLAlchemyError as e:
        logger.exception("Failed to inspect storage")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info(f"Storage overview: {result}")
    return result
