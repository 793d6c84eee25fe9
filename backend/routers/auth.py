from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas.auth import GoogleLoginRequest, UserOut
from crud import users as users_crud
from utils.auth_utils import (
    SESSION_USER_KEY,
    GoogleTokenVerifier,
    get_token_verifier,
    session_user,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/google", response_model=UserOut)
def google_login(
    login: GoogleLoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    verifier: GoogleTokenVerifier = Depends(get_token_verifier)
):
    """
    Exchange a Google ID token for a session cookie.
    """
    claims = verifier.verify(login.credential)
    if claims.get("email_verified") is False:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Google account e-mail is not verified")

    try:
        user = users_crud.upsert_google_user(db, claims)
    except SQLAlchemyError as e:
        logger.exception("Failed to store signed-in user")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    request.session[SESSION_USER_KEY] = session_user(user)
    logger.info(f"User {user.email} signed in")
    return user


@router.get("/me", response_model=UserOut)
def read_current_user(request: Request, db: Session = Depends(get_db)):
    current = request.session.get(SESSION_USER_KEY)
    if not current:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    user = users_crud.get_user(db, current["id"])
    if user is None or not user.is_active:
        request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out"}
