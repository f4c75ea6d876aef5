"""
Identity module interface.

Routes depend on IIdentityService, not the concrete implementation.
This keeps verification swappable (e.g. a remote token-info endpoint).
"""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from shared.models import Identity


@runtime_checkable
class IIdentityService(Protocol):
    """
    Interface for resolving a request's identity.
    """

    async def resolve(
        self,
        authorization: str,
        headers: Mapping[str, str],
        query_params: Mapping[str, str],
        body: Optional[Mapping[str, Any]] = None,
        strict: Optional[bool] = None,
    ) -> Identity:
        """
        Resolve the (tenant, component, trust) identity of a request.

        Args:
            authorization: Raw Authorization header value (may be empty)
            headers: Request headers
            query_params: Query string parameters
            body: Parsed JSON or form body, if any
            strict: Override the deployment's strict-auth setting

        Returns:
            Identity for the request

        Raises:
            AuthenticationError: In strict mode, if a supplied credential is invalid
            ServerConfigurationError: If verification is required but no secret is configured
        """
        ...
