"""
User management and token issuance.

This module provides:
- An in-memory user repository owned by the application
- User registration and credential validation
- Access token login and verification
"""
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import bcrypt
from pydantic import BaseModel, ConfigDict, Field

from movie_catalog.auth import tokens
from movie_catalog.base_service import BaseService
from movie_catalog.config import DEFAULT_TOKEN_TTL_SECONDS
from movie_catalog.errors import ConflictError, UnauthorizedError

DEMO_USERNAME = "user"
DEMO_PASSWORD = "12345"


# Pydantic models for request validation
class UserCredentials(BaseModel):
    """Model for login and registration bodies."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    """Model for user information returned to clients."""
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class AccessToken(BaseModel):
    access_token: str


@dataclass
class UserRecord:
    id: int
    username: str
    password_hash: bytes


class UserRepository:
    """
    Process-local user store.

    Created by the application lifespan and handed to ``AuthService``;
    contents are lost on restart.
    """
    def __init__(self, bcrypt_rounds: int = 12):
        self._users: Dict[str, UserRecord] = {}
        self._next_id = 1
        self.bcrypt_rounds = bcrypt_rounds

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, username: str) -> bool:
        return username in self._users

    def get(self, username: str) -> Optional[UserRecord]:
        return self._users.get(username)

    def add(self, username: str, password: str) -> UserRecord:
        """Store a new user with a hashed password and the next free id."""
        if username in self._users:
            raise ConflictError("User already exists")
        password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self.bcrypt_rounds)
        )
        record = UserRecord(id=self._next_id, username=username, password_hash=password_hash)
        self._next_id += 1
        self._users[username] = record
        return record


class AuthService(BaseService):
    """
    Service for registration, login and token verification.
    """
    def __init__(
        self,
        repository: UserRepository,
        secret: str,
        token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__("movie_catalog.auth")
        self.repository = repository
        self._secret = secret
        self.token_ttl_seconds = token_ttl_seconds
        self._clock = clock

    def seed_demo_user(self) -> None:
        if DEMO_USERNAME not in self.repository:
            self.register(DEMO_USERNAME, DEMO_PASSWORD)

    def register(self, username: str, password: str) -> UserOut:
        """
        Register a new user.

        Raises:
            ConflictError: If the username is already taken
        """
        record = self.repository.add(username, password)
        self.log_event("user.registered", {"id": record.id, "username": record.username})
        return UserOut.model_validate(record)

    def validate(self, username: str, password: str) -> Optional[UserOut]:
        """Return the user if the credentials match, None otherwise."""
        record = self.repository.get(username)
        if record is None:
            return None
        if not bcrypt.checkpw(password.encode("utf-8"), record.password_hash):
            return None
        return UserOut.model_validate(record)

    def login(self, username: str, password: str) -> AccessToken:
        """
        Authenticate a user and issue an access token.

        Raises:
            UnauthorizedError: If the credentials are invalid
        """
        user = self.validate(username, password)
        if user is None:
            self.log_event("user.login.failed", {"username": username})
            raise UnauthorizedError("Invalid credentials")

        now = int(self._clock())
        payload = {
            "username": user.username,
            "sub": user.id,
            "iat": now,
            "exp": now + self.token_ttl_seconds,
        }
        self.log_event("user.login", {"id": user.id, "username": user.username})
        return AccessToken(access_token=tokens.issue(payload, self._secret))

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify a token's signature and expiry and return its payload.

        Raises:
            UnauthorizedError: If the token is malformed, tampered with or expired
        """
        try:
            header, body, signature = tokens.split(token)
            expected = tokens.sign(f"{header}.{body}", self._secret)
            if not tokens.signatures_match(signature, expected):
                raise tokens.TokenError("Invalid signature")
            payload = tokens.decode(body)
            if not isinstance(payload, dict):
                raise tokens.TokenError("Token payload must be an object")
        except tokens.TokenError as e:
            self.logger.debug(f"Token rejected: {e}")
            raise UnauthorizedError("Invalid token") from e

        exp = payload.get("exp")
        if exp is not None and not isinstance(exp, (int, float)):
            raise UnauthorizedError("Invalid token")
        if exp is not None and exp < int(self._clock()):
            raise UnauthorizedError("Token expired")
        return payload
