"""
Configs module data models.

Widget settings use camelCase on the wire (the embedded widget's contract)
and snake_case in Python.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.plans.models import PlanTier


class ViewMode(str, Enum):
    """Initial widget view."""

    MAP = "map"
    LIST = "list"


class FallbackPolicy(str, Enum):
    """
    Whether a config read may fall back to the shared global-default record.

    Chosen per call site: widget bootstrap keeps the global default out of
    tenant contexts, while dashboard reads may opt in.
    """

    TENANT_ONLY = "tenant_only"
    INCLUDE_GLOBAL_DEFAULT = "include_global_default"


class UpdateMode(str, Enum):
    """Config update modes, selected by identity shape."""

    COMPONENT_ONLY = "component_only"  # editor: update by component id, never create
    TENANT_PLAN = "tenant_plan"        # plan-only change fanned out across the tenant
    UPSERT = "upsert"                  # upsert at the desired key


class WidgetSettings(BaseModel):
    """Display settings; every field is independently defaulted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    default_view: ViewMode = ViewMode.MAP
    show_header: bool = True
    header_title: str = "Our Locations"
    map_zoom_level: int = Field(default=12, ge=1, le=20)
    primary_color: str = "#3B82F6"
    show_widget_name: bool = False


SETTINGS_FIELDS = frozenset(WidgetSettings.model_fields)


class ConfigRecord(BaseModel):
    """
    A widget configuration, one per (tenant, component) key.

    `id` is None for a default record that was resolved but never stored.
    """

    id: Optional[str] = None
    config_key: str
    tenant_id: Optional[str] = None
    component_id: Optional[str] = None
    display_name: str = ""
    plan_tier: Optional[PlanTier] = None
    settings: WidgetSettings = Field(default_factory=WidgetSettings)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConfigUpdate(BaseModel):
    """
    Request body for config updates.

    Unknown fields (e.g. compId, which is identity evidence) are ignored.
    Which fields were sent matters: see settings_patch() and is_plan_only().
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    widget_name: Optional[str] = Field(None, max_length=255)
    premium_plan_name: Optional[PlanTier] = None

    default_view: Optional[ViewMode] = None
    show_header: Optional[bool] = None
    header_title: Optional[str] = Field(None, max_length=255)
    map_zoom_level: Optional[int] = Field(None, ge=1, le=20)
    primary_color: Optional[str] = Field(None, max_length=32)
    show_widget_name: Optional[bool] = None

    def settings_patch(self) -> dict[str, Any]:
        """Settings fields the caller actually sent (nulls mean "use default")."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set & SETTINGS_FIELDS
            if getattr(self, name) is not None
        }

    def merged_settings(self) -> WidgetSettings:
        """
        System defaults with the caller's fields laid over them.

        Omitted fields fall back to defaults, never to previously stored values.
        """
        return WidgetSettings(**self.settings_patch())

    @property
    def sets_display_name(self) -> bool:
        return "widget_name" in self.model_fields_set and self.widget_name is not None

    @property
    def sets_plan_tier(self) -> bool:
        return self.premium_plan_name is not None

    def is_plan_only(self) -> bool:
        """True if the only field sent is a plan tier."""
        sent = {name for name in self.model_fields_set if getattr(self, name) is not None}
        return sent == {"premium_plan_name"}


class AuthBlock(BaseModel):
    """Identity echo embedded in config responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    instance_id: Optional[str] = None
    comp_id: Optional[str] = None
    instance_token: Optional[str] = None
    is_authenticated: bool = False


class ConfigResponse(WidgetSettings):
    """Flattened settings plus name and effective plan, as the widget reads them."""

    widget_name: str = ""
    premium_plan_name: PlanTier = PlanTier.FREE
    auth: Optional[AuthBlock] = None


class WidgetSummary(BaseModel):
    """One component-level widget under a tenant (dashboard listing)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    comp_id: str
    widget_name: str = ""
    default_view: ViewMode = ViewMode.MAP
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
