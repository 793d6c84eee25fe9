from sqlalchemy.orm import Session
from models.accounts import Account
from schemas.accounts import AccountCreate, AccountUpdate
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def get_account(db: Session, account_id: str):
    return db.query(Account).filter(Account.id == account_id).first()

def get_account_by_number(db: Session, number: int, exclude_id: Optional[str] = None):
    query = db.query(Account).filter(Account.number == number)
    if exclude_id:
        query = query.filter(Account.id != exclude_id)
    return query.first()

def get_accounts(db: Session, account_type: Optional[str] = None):
    query = db.query(Account)

    if account_type:
        query = query.filter(Account.type == account_type)

    return query.order_by(Account.number.asc()).all()

def create_account(db: Session, account: AccountCreate, user_id: Optional[str] = None):
    db_account = Account(**account.model_dump(), created_by=user_id)
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    logger.info("Created account %s (%s)", db_account.number, db_account.name)
    return db_account

def update_account(db: Session, account_id: str, account_update: AccountUpdate, user_id: Optional[str] = None):
    db_account = get_account(db, account_id)
    if not db_account:
        return None

    update_data = account_update.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_account, key, value)
    db_account.updated_by = user_id

    db.commit()
    db.refresh(db_account)
    logger.info("Updated account %s (%s)", db_account.number, db_account.name)
    return db_account

def delete_account(db: Session, account_id: str):
    # Journal lines referencing the account are left as they are
    db_account = get_account(db, account_id)
    if not db_account:
        return False

    number = db_account.number
    db.delete(db_account)
    db.commit()
    logger.info("Deleted account %s", number)
    return True

def count_accounts(db: Session) -> int:
    return db.query(Account).count()

DEFAULT_ACCOUNTS = [
    {"number": 1000, "name": "Cash", "type": "Asset", "description": "Bank Account"},
    {"number": 1100, "name": "Accounts Receivable", "type": "Asset"},
    {"number": 1200, "name": "Inventory", "type": "Asset"},
    {"number": 2000, "name": "Accounts Payable", "type": "Liability"},
    {"number": 3000, "name": "Owner's Equity", "type": "Equity"},
    {"number": 4000, "name": "Sales Revenue", "type": "Revenue"},
    {"number": 5000, "name": "Cost of Goods Sold", "type": "Expense"},
    {"number": 6000, "name": "Operating Expenses", "type": "Expense"},
]

def initialize_default_accounts(db: Session, user_id: Optional[str] = None):
    """Seed the default chart of accounts; existing numbers are left untouched."""
    created = []
    for account_data in DEFAULT_ACCOUNTS:
        existing = get_account_by_number(db, account_data["number"])
        if not existing:
            create_account(db, AccountCreate(**account_data), user_id=user_id)
            created.append(account_data["number"])

    return created
