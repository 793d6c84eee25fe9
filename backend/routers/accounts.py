from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from database import get_db
from schemas.accounts import Account, AccountCreate, AccountUpdate
from crud import accounts as accounts_crud
from utils.auth_utils import get_current_user, get_user_identifier
from utils.object_id import is_valid_object_id

router = APIRouter(
    prefix="/accounts",
    tags=["Chart of Accounts"],
)
logger = logging.getLogger(__name__)


def validate_account_id(account_id: str) -> str:
    if not is_valid_object_id(account_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid account ID format")
    return account_id


@router.post("", response_model=Account, status_code=status.HTTP_201_CREATED)
def create_account(
    account: AccountCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    try:
        # Check for duplicate account number
        if accounts_crud.get_account_by_number(db, account.number):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Account number already exists")
        return accounts_crud.create_account(db, account, user_id=get_user_identifier(user))
    except SQLAlchemyError as e:
        logger.exception("Failed to create account")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("", response_model=List[Account])
def get_accounts(
    type: Optional[str] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """Chart of accounts ordered by account number."""
    try:
        return accounts_crud.get_accounts(db, account_type=type)
    except SQLAlchemyError as e:
        logger.exception("Failed to list accounts")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/initialize-defaults", status_code=status.HTTP_201_CREATED)
def initialize_default_accounts(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """
    Seeds the standard chart of accounts.
    This is idempotent; account numbers that already exist are skipped.
    """
    try:
        created = accounts_crud.initialize_default_accounts(db, user_id=get_user_identifier(user))
    except SQLAlchemyError as e:
        logger.exception("Failed to seed default accounts")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if not created:
        return {"message": "All default accounts already exist.", "created": []}

    logger.info(f"Seeded default accounts {created} by user {get_user_identifier(user)}")
    return {"message": "Default accounts created.", "created": created}


@router.get("/{account_id}", response_model=Account)
def get_account(
    account_id: str = Depends(validate_account_id),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    try:
        account = accounts_crud.get_account(db, account_id)
    except SQLAlchemyError as e:
        logger.exception(f"Error finding account {account_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    if not account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return account


@router.put("/{account_id}", response_model=Account)
def update_account(
    account_update: AccountUpdate,
    account_id: str = Depends(validate_account_id),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    try:
        # Check for duplicate account number (excluding current account)
        if account_update.number is not None and accounts_crud.get_account_by_number(
            db, account_update.number, exclude_id=account_id
        ):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Account number already exists")

        updated = accounts_crud.update_account(db, account_id, account_update, user_id=get_user_identifier(user))
    except SQLAlchemyError as e:
        logger.exception(f"Error updating account {account_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return updated


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: str = Depends(validate_account_id),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    try:
        deleted = accounts_crud.delete_account(db, account_id)
    except SQLAlchemyError as e:
        logger.exception(f"Error deleting account {account_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
