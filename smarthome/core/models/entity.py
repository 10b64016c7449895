"""Home Assistant wire-format entity model.

``EntityState`` mirrors one item of ``GET /api/states``. Only the
Home Assistant client and the entity mapper work with it; the rest of
the gateway sees ``Device`` and ``Sensor`` instead.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class EntityState(BaseModel):
    """Current state of a Home Assistant entity.

    Attributes:
        entity_id: Entity identifier ('<domain>.<object_id>')
        state: Raw state string (on, off, locked, 21.5, heat, ...)
        attributes: Entity attributes (friendly_name, brightness, ...)
        last_changed: When the state last changed
        last_updated: When the state or attributes were last updated
        context: Home Assistant change context
        domain: Entity domain (extracted from entity_id if not provided)

    Examples:
        >>> EntityState(
        ...     entity_id="light.living_room",
        ...     state="on",
        ...     attributes={"brightness": 128, "friendly_name": "Living Room Light"},
        ... )
    """

    entity_id: str = Field(..., description="Unique entity identifier")

    state: str = Field(..., description="Current state value")

    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Entity-specific attributes",
    )

    last_changed: datetime | None = Field(
        default=None,
        description="When the state last changed",
    )

    last_updated: datetime | None = Field(
        default=None,
        description="When the state was last updated (even if unchanged)",
    )

    context: dict[str, Any] | None = Field(
        default=None,
        description="Home Assistant change context",
    )

    domain: str = Field(
        default="",
        description="Entity domain (auto-extracted from entity_id)",
    )

    def model_post_init(self, __context: Any) -> None:
        """Extract domain from entity_id if not provided."""
        if not self.domain and "." in self.entity_id:
            object.__setattr__(self, "domain", self.entity_id.split(".", 1)[0])

    @property
    def friendly_name(self) -> str | None:
        """Display name reported by Home Assistant."""
        return self.attributes.get("friendly_name")

    @property
    def area_id(self) -> str | None:
        """Area identifier attribute (e.g. 'living_room')."""
        return self.attributes.get("area_id")

    @property
    def device_class(self) -> str | None:
        """Device class attribute (temperature, motion, ...)."""
        return self.attributes.get("device_class")

    @property
    def unit_of_measurement(self) -> str | None:
        """Unit of measurement for sensor entities."""
        return self.attributes.get("unit_of_measurement")

    @property
    def is_on(self) -> bool:
        """Check if entity state is 'on'."""
        return self.state == "on"
