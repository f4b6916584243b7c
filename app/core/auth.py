# app/core/auth.py
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import SQLModel

from app.core.config import get_settings

# Optional bearer: carts and delivery quotes work for guests,
# so a missing header is resolved to None instead of a 403.
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthUser(SQLModel):
    """
    Shopper identity taken from a verified Supabase access token.

    Profiles stay in Supabase; orders only need the auth id ("sub")
    and the email.
    """

    id: str
    email: str

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthUser":
        sub = claims.get("sub")
        email = claims.get("email")
        if not sub or not email:
            raise _unauthorized("Token missing sub/email")
        return cls(id=str(sub), email=email)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify a Supabase access token and return its claims.

    Checks the signature with SUPABASE_JWT_SECRET and the expiry.
    'aud' is ignored: Supabase sets it per project/role.

    Raises:
        HTTPException(401): bad signature, expired or not a JWT.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError as exc:
        raise _unauthorized("Invalid or expired token") from exc


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthUser | None:
    """
    Signed-in shopper, or None for guests.

    A token that is present but unusable is still a 401; only a missing
    Authorization header means guest.
    """
    if credentials is None:
        return None
    return AuthUser.from_claims(decode_access_token(credentials.credentials))


def require_auth(user: AuthUser | None = Depends(get_current_user)) -> AuthUser:
    """
    Guard for routes that need a signed-in shopper (checkout).
    """
    if user is None:
        raise _unauthorized("Authentication required")
    return user
