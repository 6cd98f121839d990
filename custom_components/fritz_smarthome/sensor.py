"""Sensor entities for FRITZ!DECT measurements."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.const import (
    PERCENTAGE,
    UnitOfElectricPotential,
    UnitOfEnergy,
    UnitOfPower,
    UnitOfTemperature,
)
from homeassistant.helpers.entity import EntityCategory

from .const import DOMAIN
from .entity import FritzEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import FritzDeviceCoordinator
    from .models import FritzDeviceInfo


@dataclass(frozen=True, kw_only=True)
class FritzSensorEntityDescription(SensorEntityDescription):
    """Sensor description reading one value from the device info."""

    value_fn: Callable[[FritzDeviceInfo], float | int | None]
    exists_fn: Callable[[FritzDeviceInfo], bool]


SENSOR_TYPES: tuple[FritzSensorEntityDescription, ...] = (
    FritzSensorEntityDescription(
        key="temperature",
        name="Temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        value_fn=lambda device: device.temperature.celsius
        if device.temperature
        else None,
        exists_fn=lambda device: device.temperature is not None,
    ),
    FritzSensorEntityDescription(
        key="power",
        name="Power",
        device_class=SensorDeviceClass.POWER,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfPower.WATT,
        value_fn=lambda device: device.powermeter.power if device.powermeter else None,
        exists_fn=lambda device: device.powermeter is not None,
    ),
    FritzSensorEntityDescription(
        key="energy",
        name="Energy",
        device_class=SensorDeviceClass.ENERGY,
        state_class=SensorStateClass.TOTAL_INCREASING,
        native_unit_of_measurement=UnitOfEnergy.WATT_HOUR,
        value_fn=lambda device: device.powermeter.energy if device.powermeter else None,
        exists_fn=lambda device: device.powermeter is not None,
    ),
    FritzSensorEntityDescription(
        key="voltage",
        name="Voltage",
        device_class=SensorDeviceClass.VOLTAGE,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfElectricPotential.VOLT,
        value_fn=lambda device: device.powermeter.voltage
        if device.powermeter
        else None,
        exists_fn=lambda device: device.powermeter is not None,
    ),
    FritzSensorEntityDescription(
        key="battery",
        name="Battery",
        device_class=SensorDeviceClass.BATTERY,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=PERCENTAGE,
        entity_category=EntityCategory.DIAGNOSTIC,
        value_fn=lambda device: device.battery,
        exists_fn=lambda device: device.battery is not None,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up sensor entities for every measurement a device reports."""
    coordinator: FritzDeviceCoordinator = hass.data[DOMAIN][entry.entry_id][
        "coordinator"
    ]

    async_add_entities(
        FritzSensor(coordinator, device, description)
        for device in coordinator.data.values()
        for description in SENSOR_TYPES
        if description.exists_fn(device)
    )


class FritzSensor(FritzEntity, SensorEntity):
    """A single measurement of a FRITZ!DECT device."""

    entity_description: FritzSensorEntityDescription

    def __init__(
        self,
        coordinator: FritzDeviceCoordinator,
        device: FritzDeviceInfo,
        description: FritzSensorEntityDescription,
    ) -> None:
        self.entity_description = description
        super().__init__(coordinator, device, description.key)

    def _state_snapshot(self) -> tuple[Any, ...]:
        return (self.native_value,)

    @property
    def native_value(self) -> float | int | None:
        return self.entity_description.value_fn(self._device)
