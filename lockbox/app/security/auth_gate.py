# lockbox/app/security/auth_gate.py
"""
Bearer token verification for every protected request.

The gate is stateless: it reads the signing secret from settings and
returns the caller's identity or raises an AuthFailure. Failure subtypes
are logged but all render as the same 401 to the client.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from jose import JWTError
from pydantic import ValidationError as PayloadValidationError

from lockbox.app.core.exceptions import InvalidCredential, MissingCredential
from lockbox.app.schemas.token import TokenPayload
from lockbox.app.security.jwt import decode_access_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthenticatedIdentity:
    owner_id: str
    email: Optional[str] = None


class AuthGate:

    def verify(self, raw_credential: Optional[str]) -> AuthenticatedIdentity:
        """
        Verify an Authorization header value.

        Raises:
            MissingCredential: header absent or not using the Bearer scheme
            InvalidCredential: bad signature, malformed or expired token
        """
        if not raw_credential or not raw_credential.startswith(BEARER_PREFIX):
            raise MissingCredential("no bearer credential")

        token = raw_credential[len(BEARER_PREFIX):].strip()
        if not token:
            raise MissingCredential("empty bearer credential")

        try:
            payload = decode_access_token(token)
            token_data = TokenPayload(**payload)
        except (JWTError, PayloadValidationError) as e:
            logger.info("Rejected bearer token: %s", type(e).__name__)
            raise InvalidCredential(type(e).__name__) from e

        owner_id = token_data.owner_id
        if not owner_id:
            logger.info("Rejected bearer token: no subject claim")
            raise InvalidCredential("missing subject")

        return AuthenticatedIdentity(owner_id=owner_id, email=token_data.email)


auth_gate = AuthGate()
