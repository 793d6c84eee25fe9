from sqlalchemy.orm import Session
from models.audit_mixin import utc_now
from models.users import User
import logging

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str):
    return db.query(User).filter(User.id == user_id).first()

def upsert_google_user(db: Session, claims: dict):
    """Create or refresh the user behind a verified Google ID token."""
    db_user = db.query(User).filter(User.google_sub == claims["sub"]).first()
    if db_user is None:
        db_user = User(google_sub=claims["sub"])
        db.add(db_user)
        logger.info("Registering new user %s", claims.get("email"))

    db_user.email = claims.get("email")
    db_user.name = claims.get("name")
    db_user.picture = claims.get("picture")
    db_user.last_login_at = utc_now()

    db.commit()
    db.refresh(db_user)
    return db_user
