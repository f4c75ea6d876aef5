"""
Instance credential decoding and verification.

Two physical layouts are accepted:

- Two-segment instance tokens: one base64url segment holds the JSON claims,
  the other holds base64url(HMAC-SHA256(secret, claims_segment)). Identity
  providers disagree on the order, so the segment that parses as claims is
  taken as the payload and the other as the signature.
- Three-segment HS256 JWTs, handled by PyJWT.
"""

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidTokenError
from .models import InstanceClaims


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def sign_claims_segment(secret: str, claims_segment: str) -> str:
    """Signature of a claims segment, as carried by two-segment tokens."""
    digest = hmac.new(secret.encode("utf-8"), claims_segment.encode("ascii"), hashlib.sha256).digest()
    return b64url_encode(digest)


def encode_instance_token(claims: dict[str, Any], secret: str, signature_first: bool = True) -> str:
    """
    Build a two-segment instance token.

    Args:
        claims: Claims to embed (must include instanceId to be usable)
        secret: Signing secret
        signature_first: Put the signature segment before the claims segment

    Returns:
        Token string `signature.claims` or `claims.signature`
    """
    claims_segment = b64url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signature = sign_claims_segment(secret, claims_segment)
    if signature_first:
        return f"{signature}.{claims_segment}"
    return f"{claims_segment}.{signature}"


def parse_claims_segment(segment: str) -> Optional[dict[str, Any]]:
    """Decode a segment as a JSON object, or return None if it is not one."""
    try:
        decoded = json.loads(b64url_decode(segment).decode("utf-8"))
    except (ValueError, binascii.Error, UnicodeDecodeError):
        return None
    return decoded if isinstance(decoded, dict) else None


def split_instance_token(credential: str) -> tuple[str, str, dict[str, Any]]:
    """
    Detect which segment of a two-segment token holds the claims.

    Returns:
        (claims_segment, signature_segment, raw_claims)

    Raises:
        InvalidTokenError: If neither segment decodes to a claims object
    """
    first, second = credential.split(".", 1)
    for claims_segment, signature_segment in ((first, second), (second, first)):
        raw = parse_claims_segment(claims_segment)
        if raw is not None:
            return claims_segment, signature_segment, raw
    raise InvalidTokenError("Token claims could not be decoded")


def to_instance_claims(raw: dict[str, Any]) -> InstanceClaims:
    """
    Validate raw claims.

    Raises:
        InvalidTokenError: If the claims carry no instance identifier
    """
    try:
        return InstanceClaims.model_validate(raw)
    except PydanticValidationError:
        raise InvalidTokenError("Token is missing instanceId")


class TokenVerifier:
    """
    Decodes instance credentials, with or without signature verification.

    Both methods raise InvalidTokenError on failure; choosing how to degrade
    (absent identity vs. 401) is the caller's policy decision.
    """

    def __init__(self, secret: str = ""):
        self._secret = secret

    @property
    def has_secret(self) -> bool:
        return bool(self._secret)

    def decode_unverified(self, credential: str) -> InstanceClaims:
        """Best-effort decode of the embedded claims, without checking the signature."""
        segments = credential.count(".") + 1
        if segments == 2:
            _, _, raw = split_instance_token(credential)
            return to_instance_claims(raw)
        if segments == 3:
            try:
                raw = jwt.decode(credential, options={"verify_signature": False})
            except jwt.InvalidTokenError as e:
                raise InvalidTokenError(f"Invalid token: {e}")
            return to_instance_claims(raw)
        raise InvalidTokenError("Unrecognized token format")

    def verify(self, credential: str) -> InstanceClaims:
        """Verify the credential against the instance secret and return its claims."""
        if not self._secret:
            raise InvalidTokenError("No verification secret configured")

        segments = credential.count(".") + 1
        if segments == 2:
            claims_segment, signature, raw = split_instance_token(credential)
            expected = sign_claims_segment(self._secret, claims_segment)
            provided = signature.rstrip("=")
            if not provided.isascii() or not hmac.compare_digest(expected, provided):
                raise InvalidTokenError("Token signature mismatch")
            return to_instance_claims(raw)
        if segments == 3:
            try:
                raw = jwt.decode(
                    credential,
                    self._secret,
                    algorithms=["HS256"],
                    options={"verify_aud": False},
                )
            except jwt.ExpiredSignatureError:
                raise InvalidTokenError("Token has expired")
            except jwt.InvalidTokenError as e:
                raise InvalidTokenError(f"Invalid token: {e}")
            return to_instance_claims(raw)
        raise InvalidTokenError("Unrecognized token format")
