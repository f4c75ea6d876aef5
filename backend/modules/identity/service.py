"""
Identity service implementation.

Combines component extraction and credential verification into one
Identity per request, applying the deployment's trust policy:

- no credential: absent identity, in every mode
- no secret configured: unverified decode (or 500 when the secret is required)
- secret configured: verified decode; failures degrade to absent identity
  in permissive mode and raise in strict mode
"""

import logging
from typing import Any, Mapping, Optional

from shared.config import Settings, get_settings
from shared.exceptions import ServerConfigurationError
from shared.models import Identity, TrustLevel

from .exceptions import InvalidTokenError
from .extractor import extract_component_id, extract_credential
from .interfaces import IIdentityService
from .verifier import TokenVerifier

logger = logging.getLogger(__name__)


class IdentityService(IIdentityService):
    """
    Resolves request identity from credentials and side-channel identifiers.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._verifier = TokenVerifier(self._settings.instance_secret)

    async def resolve(
        self,
        authorization: str,
        headers: Mapping[str, str],
        query_params: Mapping[str, str],
        body: Optional[Mapping[str, Any]] = None,
        strict: Optional[bool] = None,
    ) -> Identity:
        """Resolve the identity of a request."""
        strict = self._settings.strict_auth if strict is None else strict
        component_id = extract_component_id(
            headers,
            query_params,
            body,
            header_name=self._settings.component_header,
        )
        identity = self.verify_credential(extract_credential(authorization), strict=strict)

        resolved = identity.model_copy(update={"component_id": component_id})
        logger.debug(
            f"Resolved identity: tenant={'yes' if resolved.tenant_id else 'no'} "
            f"component={resolved.component_id or '-'} trust={resolved.trust.value}"
        )
        return resolved

    def verify_credential(self, credential: str, strict: bool = False) -> Identity:
        """
        Turn a raw credential into a tenant-level Identity.

        Args:
            credential: Credential with any `Bearer ` prefix removed
            strict: Raise instead of degrading to an absent identity

        Returns:
            Identity without a component id
        """
        if not credential:
            return Identity(trust=TrustLevel.ABSENT)

        if not self._verifier.has_secret:
            if strict or self._settings.secret_required:
                logger.error("Instance secret is not configured but verification is required")
                raise ServerConfigurationError("instance_secret")
            try:
                claims = self._verifier.decode_unverified(credential)
            except InvalidTokenError as e:
                logger.info(f"Credential could not be decoded, continuing without identity: {e.message}")
                return Identity(trust=TrustLevel.ABSENT)
            return Identity(
                tenant_id=claims.instance_id,
                vendor_product_id=claims.vendor_product_id,
                trust=TrustLevel.UNVERIFIABLE,
            )

        try:
            claims = self._verifier.verify(credential)
        except InvalidTokenError as e:
            if strict:
                raise
            logger.info(f"Credential verification failed, continuing without identity: {e.message}")
            return Identity(trust=TrustLevel.ABSENT)

        return Identity(
            tenant_id=claims.instance_id,
            vendor_product_id=claims.vendor_product_id,
            trust=TrustLevel.TRUSTED,
        )

