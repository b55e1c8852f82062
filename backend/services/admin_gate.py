"""
Admin Gate
Issues and verifies the signed, time-limited tokens that guard every
state-changing admin operation.
"""
import hmac
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional

import jwt

from models import AdminIdentity, AdminRole
from .errors import AuthError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL = timedelta(hours=2)


class AdminGate:
    def __init__(self, admin_key: Optional[str], secret: Optional[str], ttl: timedelta = DEFAULT_TOKEN_TTL):
        self.admin_key = admin_key
        self.secret = secret
        self.ttl = ttl

    def login(self, password: str) -> str:
        if not self.admin_key or not self.secret:
            logger.warning("Admin login attempted but ADMIN_KEY/JWT_SECRET are not configured")
            raise AuthError("Invalid password", status_code=401)
        if not hmac.compare_digest(password.encode(), self.admin_key.encode()):
            raise AuthError("Invalid password", status_code=401)
        return self.issue_token()

    def issue_token(self, ttl: Optional[timedelta] = None) -> str:
        if not self.secret:
            raise AuthError("Token signing is not configured", status_code=401)
        now = datetime.now(timezone.utc)
        claims = {
            "role": AdminRole.ADMIN.value,
            "iat": now,
            "exp": now + (self.ttl if ttl is None else ttl),
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def authorize(self, authorization: Optional[str]) -> AdminIdentity:
        """Validate an ``Authorization: Bearer <token>`` header value."""
        if not authorization:
            raise AuthError("Missing token", reason=AuthError.MISSING)

        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthError("Invalid or expired token")
        if not self.secret:
            raise AuthError("Invalid or expired token")

        try:
            claims = jwt.decode(
                token.strip(),
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            logger.info("Rejected admin token: %s", e)
            raise AuthError("Invalid or expired token") from e

        if claims.get("role") != AdminRole.ADMIN.value:
            raise AuthError("Invalid or expired token")

        return AdminIdentity(
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
