"""
Configs module interface.

The API layer depends on IConfigService for every config read and write.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import Identity
from modules.plans.models import PlanTier

from .models import (
    AuthBlock,
    ConfigRecord,
    ConfigResponse,
    ConfigUpdate,
    FallbackPolicy,
    WidgetSummary,
)


@runtime_checkable
class IConfigService(Protocol):
    """
    Interface for scoped widget configuration.
    """

    async def find_config(
        self,
        identity: Identity,
        policy: FallbackPolicy,
    ) -> Optional[ConfigRecord]:
        """
        Resolve the stored config for an identity without creating anything.

        Returns:
            The first record along the lookup chain, or None
        """
        ...

    async def get_effective_config(
        self,
        identity: Identity,
        policy: FallbackPolicy,
    ) -> ConfigRecord:
        """
        Resolve the config for an identity, creating it on first read.

        A record is only created when both tenant and component are known.
        Other identities that match nothing get an unsaved default record.
        """
        ...

    async def update_config(self, identity: Identity, patch: ConfigUpdate) -> ConfigRecord:
        """
        Apply a config update in the mode selected by the identity's shape.

        Raises:
            ConfigNotFoundError: Editor-mode update with no record for the component
        """
        ...

    async def resolve_plan(
        self,
        identity: Identity,
        record: Optional[ConfigRecord],
    ) -> PlanTier:
        """Effective plan for a record, inheriting from siblings when unset."""
        ...

    async def to_response(
        self,
        identity: Identity,
        record: Optional[ConfigRecord],
        auth: Optional[AuthBlock] = None,
    ) -> ConfigResponse:
        """Flatten a record into the widget-facing response."""
        ...

    async def list_widgets(self, tenant_id: str) -> list[WidgetSummary]:
        """List component-level configs under a tenant."""
        ...
