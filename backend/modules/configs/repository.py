"""
Config repository for document store access.

Encapsulates all queries against the widget_configs collection.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from shared.store import IDocumentStore, In, NotEqual, PRESENT
from modules.plans.models import PlanTier

from .models import ConfigRecord, WidgetSettings


class ConfigRepository(BaseRepository[ConfigRecord]):
    """
    Repository for widget config records.

    Note: This repository does NOT decide which record a caller may see.
    The service layer resolves identity into keys first.
    """

    collection = "widget_configs"

    def __init__(self, store: IDocumentStore) -> None:
        super().__init__(store)
        self._store.ensure_unique(self.collection, "config_key")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_key(self, config_key: str) -> Optional[ConfigRecord]:
        doc = self._store.find_one(self.collection, {"config_key": config_key})
        return self._map_to_record(doc) if doc else None

    def find_by_keys(self, keys: list[str]) -> Optional[ConfigRecord]:
        """Return the record for the first key in `keys` that exists."""
        if not keys:
            return None
        docs = self._store.find(self.collection, {"config_key": In(tuple(keys))})
        by_key = {doc["config_key"]: doc for doc in docs}
        for key in keys:
            if key in by_key:
                return self._map_to_record(by_key[key])
        return None

    def get_by_component(self, component_id: str) -> Optional[ConfigRecord]:
        """Most recently updated record for a component, across all tenants."""
        docs = self._store.find(
            self.collection,
            {"component_id": component_id},
            order_by="updated_at",
            descending=True,
            limit=1,
        )
        return self._map_to_record(docs[0]) if docs else None

    def list_for_tenant(
        self,
        tenant_id: str,
        with_component: bool = False,
    ) -> list[ConfigRecord]:
        filters: dict[str, Any] = {"tenant_id": tenant_id}
        if with_component:
            filters["component_id"] = PRESENT
        docs = self._store.find(self.collection, filters, order_by="created_at")
        return [self._map_to_record(doc) for doc in docs]

    def find_plan_tier_for_tenant(
        self,
        tenant_id: str,
        exclude_key: Optional[str] = None,
    ) -> Optional[PlanTier]:
        """First explicit plan tier among the tenant's records, if any."""
        filters: dict[str, Any] = {"tenant_id": tenant_id, "plan_tier": PRESENT}
        if exclude_key:
            filters["config_key"] = NotEqual(exclude_key)
        docs = self._store.find(self.collection, filters, order_by="updated_at", descending=True, limit=1)
        return PlanTier(docs[0]["plan_tier"]) if docs else None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(
        self,
        config_key: str,
        tenant_id: Optional[str],
        component_id: Optional[str],
        settings: Optional[WidgetSettings] = None,
        display_name: str = "",
        plan_tier: Optional[PlanTier] = None,
    ) -> ConfigRecord:
        """
        Insert a new record.

        Raises:
            DuplicateKeyError: If a record already exists at `config_key`
        """
        now = self.now()
        doc = {
            "id": self.new_id(),
            "config_key": config_key,
            "tenant_id": tenant_id,
            "component_id": component_id,
            "display_name": display_name,
            "plan_tier": plan_tier.value if plan_tier else None,
            "settings": settings.model_dump(mode="json") if settings else None,
            "created_at": now,
            "updated_at": now,
        }
        return self._map_to_record(self._store.insert(self.collection, doc))

    def update_by_key(self, config_key: str, values: dict[str, Any]) -> Optional[ConfigRecord]:
        docs = self._store.update(
            self.collection,
            {"config_key": config_key},
            self._serialize({**values, "updated_at": self.now()}),
        )
        return self._map_to_record(docs[0]) if docs else None

    def set_plan_for_tenant(
        self,
        tenant_id: str,
        plan_tier: PlanTier,
        exclude_key: Optional[str] = None,
    ) -> list[ConfigRecord]:
        """Force every record under the tenant to `plan_tier`."""
        filters: dict[str, Any] = {"tenant_id": tenant_id}
        if exclude_key:
            filters["config_key"] = NotEqual(exclude_key)
        docs = self._store.update(
            self.collection,
            filters,
            {"plan_tier": plan_tier.value, "updated_at": self.now()},
        )
        return [self._map_to_record(doc) for doc in docs]

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _serialize(values: dict[str, Any]) -> dict[str, Any]:
        serialized = dict(values)
        if isinstance(serialized.get("settings"), WidgetSettings):
            serialized["settings"] = serialized["settings"].model_dump(mode="json")
        if isinstance(serialized.get("plan_tier"), PlanTier):
            serialized["plan_tier"] = serialized["plan_tier"].value
        return serialized

    @staticmethod
    def _map_to_record(doc: dict[str, Any]) -> ConfigRecord:
        """Map a stored document to a ConfigRecord; stored settings may be sparse."""
        data = dict(doc)
        data["settings"] = WidgetSettings.model_validate(data.get("settings") or {})
        data["display_name"] = data.get("display_name") or ""
        return ConfigRecord.model_validate(data)
