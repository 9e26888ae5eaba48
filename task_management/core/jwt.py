"""
JWT access token issuance and validation.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt

from task_management.core.config import MIN_SECRET_KEY_BYTES, Settings
from task_management.models.user import User
from task_management.utils.time import utc_now

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["exp", "iat", "iss", "aud", "sub"]


class JWTService:
    """Signs and verifies HMAC access tokens for authenticated users."""

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
        expire_hours: int = 24,
    ):
        if not secret_key or len(secret_key.encode("utf-8")) < MIN_SECRET_KEY_BYTES:
            raise ValueError(f"JWT secret key must be at least {MIN_SECRET_KEY_BYTES} bytes")
        if not issuer or not audience:
            raise ValueError("JWT issuer and audience are required")

        self.secret_key = secret_key
        self.issuer = issuer
        self.audience = audience
        self.algorithm = algorithm
        self.lifetime = timedelta(hours=expire_hours)

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTService":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            algorithm=settings.JWT_ALGORITHM,
            expire_hours=settings.ACCESS_TOKEN_EXPIRE_HOURS,
        )

    def expires_at(self, issued_at: datetime) -> datetime:
        return issued_at + self.lifetime

    def issue_token(self, user: User, issued_at: Optional[datetime] = None) -> str:
        """
        Create a signed access token for a user.

        Args:
            user: Persisted user (must have an id)
            issued_at: Issuance instant, defaults to now

        Returns:
            Encoded JWT string
        """
        issued_at = issued_at or utc_now()
        payload = {
            "sub": str(user.id),
            "name": user.username,
            "email": user.email,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": issued_at,
            "exp": self.expires_at(issued_at),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Decode and verify a token.

        Signature, issuer, audience and expiry are all checked with no clock
        skew allowance. Returns the claims, or None when the token is rejected.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                leeway=0,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as exc:
            logger.warning("Rejected access token: %s", exc)
            return None

    def validate_token(self, token: str) -> bool:
        return self.decode_token(token) is not None
