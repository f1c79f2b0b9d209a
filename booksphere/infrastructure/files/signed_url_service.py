"""Short-lived signed URLs for background images."""

from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError
from pydantic import BaseModel

from booksphere.config import get_settings
from booksphere.exceptions import BookSphereError

ALGORITHM = "HS256"
FILES_URL_PREFIX = "/api/files/"


class SignedFilePayload(BaseModel):
    filepath: str
    user_id: int | None = None


class SignedUrlService:
    """Signs storage paths into ``/api/files/<token>`` URLs."""

    def __init__(self, secret_key: str | None = None, expiry_seconds: int | None = None) -> None:
        settings = get_settings()
        self.secret_key = secret_key or settings.SECRET_KEY
        self.expiry_seconds = expiry_seconds or settings.SIGNED_URL_EXPIRY_SECONDS

    def generate(self, filepath: str, user_id: int | None = None) -> str:
        expire = datetime.now(UTC) + timedelta(seconds=self.expiry_seconds)
        to_encode = {"filepath": filepath, "userId": user_id, "exp": expire, "type": "file"}
        token = jwt.encode(to_encode, self.secret_key, algorithm=ALGORITHM)
        return f"{FILES_URL_PREFIX}{token}"

    def verify(self, token: str) -> SignedFilePayload:
        """
        Decode a token produced by ``generate``.

        Accepts the bare token or the full ``/api/files/<token>`` URL.

        Raises:
            BookSphereError: 401 if the token is invalid, expired or not a file token
        """
        token = token.removeprefix(FILES_URL_PREFIX)
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except InvalidTokenError as e:
            raise BookSphereError("Invalid or expired file access token", status_code=401) from e
        if payload.get("type") != "file" or not payload.get("filepath"):
            raise BookSphereError("Invalid or expired file access token", status_code=401)
        return SignedFilePayload(filepath=payload["filepath"], user_id=payload.get("userId"))
