"""Bearer credential adapter for the external auth provider."""

from datetime import timedelta
from typing import Optional

import jwt

from brokerage.core.exceptions import AuthenticationError
from brokerage.core.timezone import now_utc
from brokerage.domain.models import Principal, Role

DEFAULT_TOKEN_TTL = timedelta(hours=12)


class JwtAuthProvider:
    """
    Validates signed bearer tokens and turns them into a Principal.

    Claims: `sub` (account id), `role`, `verified`, `exp`.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._token_ttl = token_ttl

    def verify(self, token: Optional[str]) -> Principal:
        """Decode and validate a bearer token."""
        if not token:
            raise AuthenticationError()
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Token is invalid") from exc

        try:
            role = Role(payload.get("role", Role.USER.value))
        except ValueError as exc:
            raise AuthenticationError(f"Unknown role in token: {payload.get('role')!r}") from exc

        return Principal(
            account_id=str(payload["sub"]),
            role=role,
            verified=bool(payload.get("verified", False)),
        )

    def issue(self, principal: Principal) -> str:
        """Sign a token for `principal` valid for the configured window."""
        issued_at = now_utc()
        payload = {
            "sub": principal.account_id,
            "role": principal.role.value,
            "verified": principal.verified,
            "iat": issued_at,
            "exp": issued_at + self._token_ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)
