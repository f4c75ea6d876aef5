"""
Config service implementation.

Turns a request identity into config keys, applies the fallback policy
chosen by the caller, and implements the three update modes:

- component only (editor): update the component's record in place, never create
- tenant only with a plan-only patch: fan the plan out across the tenant
- otherwise: upsert at the desired key with settings rebuilt from defaults

Plan tiers set on one record propagate to its siblings; records written
without a tier inherit one from a sibling.
"""

import logging
from typing import Optional

from shared.config import Settings, get_settings
from shared.exceptions import DuplicateKeyError
from shared.models import Identity
from modules.plans.models import PlanTier
from modules.plans.resolver import resolve_plan_tier

from .exceptions import ConfigNotFoundError
from .interfaces import IConfigService
from .keys import build_lookup_chain, compute_config_key, default_config_key
from .models import (
    AuthBlock,
    ConfigRecord,
    ConfigResponse,
    ConfigUpdate,
    FallbackPolicy,
    UpdateMode,
    WidgetSettings,
    WidgetSummary,
)
from .repository import ConfigRepository

logger = logging.getLogger(__name__)


def select_update_mode(identity: Identity, patch: ConfigUpdate) -> UpdateMode:
    """Pick the update mode from the identity's shape and the patch contents."""
    if identity.is_editor_mode:
        return UpdateMode.COMPONENT_ONLY
    if identity.is_tenant_only and patch.is_plan_only():
        return UpdateMode.TENANT_PLAN
    return UpdateMode.UPSERT


class ConfigService(IConfigService):
    """
    Config service backed by a ConfigRepository.

    Implements IConfigService protocol.
    """

    def __init__(self, repository: ConfigRepository, settings: Optional[Settings] = None):
        self._repo = repository
        self._settings = settings or get_settings()

    @property
    def _prefix(self) -> str:
        return self._settings.config_key_prefix

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def find_config(
        self,
        identity: Identity,
        policy: FallbackPolicy,
    ) -> Optional[ConfigRecord]:
        if identity.is_editor_mode:
            record = self._repo.get_by_component(identity.component_id)
            if record is not None:
                return record
            if policy == FallbackPolicy.INCLUDE_GLOBAL_DEFAULT:
                return self._repo.get_by_key(default_config_key(self._prefix))
            return None

        chain = build_lookup_chain(
            identity.tenant_id,
            identity.component_id,
            policy,
            prefix=self._prefix,
        )
        return self._repo.find_by_keys(chain)

    async def get_effective_config(
        self,
        identity: Identity,
        policy: FallbackPolicy,
    ) -> ConfigRecord:
        record = await self.find_config(identity, policy)
        if record is not None:
            return record

        if not identity.is_fully_scoped:
            return self._unsaved_default(identity)

        key = compute_config_key(identity.tenant_id, identity.component_id, self._prefix)
        inherited = self._repo.find_plan_tier_for_tenant(identity.tenant_id, exclude_key=key)
        try:
            record = self._repo.create(
                key,
                identity.tenant_id,
                identity.component_id,
                settings=WidgetSettings(),
                plan_tier=inherited,
            )
            logger.info(f"Created config {key}")
            return record
        except DuplicateKeyError:
            # A concurrent first request created it
            existing = self._repo.get_by_key(key)
            if existing is None:
                raise
            return existing

    async def resolve_plan(
        self,
        identity: Identity,
        record: Optional[ConfigRecord],
    ) -> PlanTier:
        stored = record.plan_tier if record else None
        tenant_id = identity.tenant_id or (record.tenant_id if record else None)
        if stored is None and tenant_id:
            stored = self._repo.find_plan_tier_for_tenant(tenant_id)
        return resolve_plan_tier(stored, identity.vendor_product_id)

    async def to_response(
        self,
        identity: Identity,
        record: Optional[ConfigRecord],
        auth: Optional[AuthBlock] = None,
    ) -> ConfigResponse:
        settings = record.settings if record else WidgetSettings()
        return ConfigResponse(
            **settings.model_dump(),
            widget_name=record.display_name if record else "",
            premium_plan_name=await self.resolve_plan(identity, record),
            auth=auth,
        )

    async def list_widgets(self, tenant_id: str) -> list[WidgetSummary]:
        records = self._repo.list_for_tenant(tenant_id, with_component=True)
        return [
            WidgetSummary(
                comp_id=record.component_id,
                widget_name=record.display_name,
                default_view=record.settings.default_view,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record in records
        ]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def update_config(self, identity: Identity, patch: ConfigUpdate) -> ConfigRecord:
        mode = select_update_mode(identity, patch)
        logger.debug(f"Config update mode={mode.value}")

        if mode == UpdateMode.COMPONENT_ONLY:
            return self._update_by_component(identity.component_id, patch)
        if mode == UpdateMode.TENANT_PLAN:
            return self._set_tenant_plan(identity.tenant_id, patch.premium_plan_name)
        return self._upsert(identity, patch)

    def _update_by_component(self, component_id: str, patch: ConfigUpdate) -> ConfigRecord:
        existing = self._repo.get_by_component(component_id)
        if existing is None:
            raise ConfigNotFoundError(f"component {component_id}")

        if patch.sets_plan_tier:
            logger.warning(
                f"Ignoring plan change for component {component_id}: no verified tenant"
            )

        values: dict = {"settings": patch.merged_settings()}
        if patch.sets_display_name:
            values["display_name"] = patch.widget_name
        if existing.plan_tier is None and existing.tenant_id:
            inherited = self._repo.find_plan_tier_for_tenant(
                existing.tenant_id, exclude_key=existing.config_key
            )
            if inherited is not None:
                values["plan_tier"] = inherited

        updated = self._repo.update_by_key(existing.config_key, values)
        if updated is None:
            raise ConfigNotFoundError(f"component {component_id}")
        return updated

    def _set_tenant_plan(self, tenant_id: str, plan_tier: PlanTier) -> ConfigRecord:
        tenant_key = compute_config_key(tenant_id, None, self._prefix)

        updated = self._repo.set_plan_for_tenant(tenant_id, plan_tier)
        if not updated:
            try:
                record = self._repo.create(tenant_key, tenant_id, None, plan_tier=plan_tier)
                logger.info(f"Created tenant plan record {tenant_key} ({plan_tier.value})")
                return record
            except DuplicateKeyError:
                updated = self._repo.set_plan_for_tenant(tenant_id, plan_tier)

        logger.info(f"Set plan {plan_tier.value} on {len(updated)} config(s) for tenant {tenant_id}")
        for record in updated:
            if record.config_key == tenant_key:
                return record
        return updated[0]

    def _upsert(self, identity: Identity, patch: ConfigUpdate) -> ConfigRecord:
        tenant_id = identity.tenant_id
        key = compute_config_key(tenant_id, identity.component_id, self._prefix)
        existing = self._repo.get_by_key(key)

        values: dict = {"settings": patch.merged_settings()}
        if patch.sets_display_name:
            values["display_name"] = patch.widget_name

        plan_tier = patch.premium_plan_name
        if plan_tier is not None:
            values["plan_tier"] = plan_tier
        elif tenant_id and (existing is None or existing.plan_tier is None):
            inherited = self._repo.find_plan_tier_for_tenant(tenant_id, exclude_key=key)
            if inherited is not None:
                values["plan_tier"] = inherited

        record = None
        if existing is not None:
            record = self._repo.update_by_key(key, values)
        if record is None:
            try:
                record = self._repo.create(
                    key,
                    tenant_id,
                    identity.component_id if tenant_id else None,
                    settings=values["settings"],
                    display_name=values.get("display_name", ""),
                    plan_tier=values.get("plan_tier"),
                )
                logger.info(f"Created config {key}")
            except DuplicateKeyError:
                record = self._repo.update_by_key(key, values)
                if record is None:
                    raise

        if plan_tier is not None and tenant_id:
            propagated = self._repo.set_plan_for_tenant(tenant_id, plan_tier, exclude_key=key)
            if propagated:
                logger.info(
                    f"Propagated plan {plan_tier.value} to {len(propagated)} sibling config(s)"
                )
        return record

    def _unsaved_default(self, identity: Identity) -> ConfigRecord:
        return ConfigRecord(
            config_key=compute_config_key(identity.tenant_id, identity.component_id, self._prefix),
            tenant_id=identity.tenant_id,
            component_id=identity.component_id if identity.tenant_id else None,
        )

