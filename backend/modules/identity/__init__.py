"""
Identity module.

Resolves which tenant (instance) and component (widget placement) a
request speaks for, and how far that claim could be verified.

Public API:
- IIdentityService: Interface for identity resolution
- InstanceClaims: Claims carried by an instance credential
- TokenVerifier: Credential decoding and signature verification
- Identity exceptions: InvalidTokenError
"""

from .interfaces import IIdentityService
from .models import InstanceClaims, AuthInfoResponse
from .verifier import TokenVerifier, encode_instance_token
from .extractor import extract_component_id, extract_credential
from .exceptions import InvalidTokenError

__all__ = [
    # Interface
    "IIdentityService",
    # Models
    "InstanceClaims",
    "AuthInfoResponse",
    # Verification
    "TokenVerifier",
    "encode_instance_token",
    "extract_component_id",
    "extract_credential",
    # Exceptions
    "InvalidTokenError",
]
