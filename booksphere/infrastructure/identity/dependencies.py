"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends, WebSocket
from fastapi.security import OAuth2PasswordBearer

from booksphere.core import container
from booksphere.database import DatabaseSession
from booksphere.domain.identity.entities.user import User
from booksphere.exceptions import CredentialsException, UserNotFoundError
from booksphere.infrastructure.identity.services.token_service import verify_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)], db: DatabaseSession
) -> User:
    """
    Get the current authenticated user from the access token.

    Args:
        token: JWT access token from Authorization header
        db: Database session

    Returns:
        User domain entity

    Raises:
        CredentialsException: If token is invalid or user not found
    """
    user_id = verify_access_token(token)
    if user_id is None:
        raise CredentialsException

    container.db.override(db)
    try:
        use_case = container.reader_preferences_use_case()
        return use_case.get_user(user_id)
    except UserNotFoundError:
        raise CredentialsException from None
    finally:
        container.db.reset_override()


def websocket_token(websocket: WebSocket) -> str | None:
    """Bearer credential from the ``token`` query parameter or the Authorization header."""
    token = websocket.query_params.get("token")
    if token:
        return token
    authorization = websocket.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return None


async def authenticate_websocket(websocket: WebSocket) -> User | None:
    """
    Resolve the user behind a websocket handshake.

    Returns:
        The user, or None when the credential is missing, invalid, expired or
        belongs to no profile
    """
    token = websocket_token(websocket)
    if not token:
        return None
    user_id = verify_access_token(token)
    if user_id is None:
        return None

    gateway = container.reader_profile_gateway()
    try:
        return await gateway.get_user(user_id)
    except UserNotFoundError:
        return None
