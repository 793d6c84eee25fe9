import json
import logging
import time
from typing import Callable, Dict, List, Optional
import urllib.request

from fastapi import Depends, HTTPException, status, Request
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from config import GOOGLE_JWKS_URL

logger = logging.getLogger(__name__)

# Google signs ID tokens with either spelling of its issuer
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")

# Session key holding the signed-in user
SESSION_USER_KEY = "user"


def fetch_jwks(url: str) -> List[dict]:
    with urllib.request.urlopen(url, timeout=10) as response:
        jwks_data = json.loads(response.read().decode("utf-8"))
    return jwks_data["keys"]


class GoogleTokenVerifier:
    """
    Verifies Google Sign-In ID tokens against Google's published JWKS.

    The key set is cached for `cache_seconds`; a token signed with an unknown
    `kid` forces one refresh, which covers Google's key rotation.
    """

    def __init__(
        self,
        client_id: Optional[str],
        jwks_url: str = GOOGLE_JWKS_URL,
        fetch: Callable[[str], List[dict]] = fetch_jwks,
        cache_seconds: int = 60 * 60 * 24,
    ):
        self.client_id = client_id
        self.jwks_url = jwks_url
        self._fetch = fetch
        self.cache_seconds = cache_seconds
        self.jwks_cache = {
            "keys": [],
            "expiration_time": 0,
        }

    def get_jwks(self, force_refresh: bool = False) -> List[dict]:
        """
        Retrieves the JSON Web Key Set from Google.
        Caches the keys to improve performance.
        """
        if not force_refresh and self.jwks_cache["keys"] and time.time() < self.jwks_cache["expiration_time"]:
            return self.jwks_cache["keys"]

        logger.info(f"Fetching JWKS from: {self.jwks_url}")
        try:
            keys = self._fetch(self.jwks_url)
        except Exception as e:
            logger.error(f"Error fetching JWKS: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not fetch Google public keys for token validation."
            )

        self.jwks_cache = {
            "keys": keys,
            "expiration_time": time.time() + self.cache_seconds
        }
        return keys

    def _find_key(self, kid: str, force_refresh: bool = False) -> dict:
        for key in self.get_jwks(force_refresh=force_refresh):
            if key.get("kid") == kid:
                return {
                    "kty": key["kty"],
                    "kid": key["kid"],
                    "use": key.get("use", "sig"),
                    "n": key["n"],
                    "e": key["e"],
                }
        return {}

    def verify(self, token: str) -> Dict[str, any]:
        """Return the claims of a valid ID token, raise 401 otherwise."""
        if not self.client_id:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Google sign-in is not configured."
            )

        # Find the right key to use for decoding
        try:
            unverified_header = jwt.get_unverified_header(token)
        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token header"
            )

        kid = unverified_header.get("kid")
        rsa_key = self._find_key(kid) or self._find_key(kid, force_refresh=True)
        if not rsa_key:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unable to find a matching public key to verify the token",
            )

        # Decode and validate the token
        try:
            return jwt.decode(
                token,
                rsa_key,
                algorithms=["RS256"],
                audience=self.client_id,
                issuer=GOOGLE_ISSUERS,
                options={"verify_at_hash": False},
            )
        except ExpiredSignatureError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has expired"
            )
        except JWTClaimsError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Invalid token claims: {e}"
            )
        except JWTError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Token validation failed: {e}"
            )


def get_token_verifier(request: Request) -> GoogleTokenVerifier:
    return request.app.state.token_verifier


def session_user(user) -> dict:
    """The subset of a user record kept in the session cookie."""
    return {"id": user.id, "email": user.email, "name": user.name}


def get_current_user(
    request: Request,
    verifier: GoogleTokenVerifier = Depends(get_token_verifier),
) -> Dict[str, any]:
    """
    FastAPI dependency returning the signed-in user.

    The user comes from the session cookie set by POST /auth/google; API
    clients may instead send the Google ID token as a Bearer token.

    Usage:
        @router.get("/secure-data", dependencies=[Depends(get_current_user)])
        def secure_endpoint():
            return {"message": "This is secure data."}
    """
    user = request.session.get(SESSION_USER_KEY)
    if user:
        return user

    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    # The token is expected to be in the format "Bearer <token>"
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    claims = verifier.verify(parts[1])
    return {"id": claims["sub"], "email": claims.get("email"), "name": claims.get("name")}


def get_user_identifier(user: dict) -> Optional[str]:
    if not user:
        return None
    return user.get("email") or user.get("id")
