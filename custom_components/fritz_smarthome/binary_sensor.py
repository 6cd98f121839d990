"""Binary sensor entities for FRITZ!DECT devices."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)
from homeassistant.helpers.entity import EntityCategory

from .const import DOMAIN
from .entity import FritzEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import FritzDeviceCoordinator


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up battery low sensors for battery powered devices."""
    coordinator: FritzDeviceCoordinator = hass.data[DOMAIN][entry.entry_id][
        "coordinator"
    ]

    async_add_entities(
        FritzBatteryLowSensor(coordinator, device, "battery_low")
        for device in coordinator.data.values()
        if device.batterylow is not None
    )


class FritzBatteryLowSensor(FritzEntity, BinarySensorEntity):
    _attr_name = "Battery low"
    _attr_device_class = BinarySensorDeviceClass.BATTERY
    _attr_entity_category = EntityCategory.DIAGNOSTIC

    def _state_snapshot(self) -> tuple[Any, ...]:
        return (self._device.batterylow,)

    @property
    def is_on(self) -> bool | None:
        return self._device.batterylow
