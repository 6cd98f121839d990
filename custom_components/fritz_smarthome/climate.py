"""Climate entities for FRITZ!DECT radiator thermostats.

This module represents devices with the Thermostat feature as Home Assistant
climate entities. Current and target temperature come from the hkr record of
the device list.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACMode,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature

from .const import (
    DOMAIN,
    FEATURE_THERMOSTAT,
    THERMOSTAT_MAX_TEMP,
    THERMOSTAT_MIN_TEMP,
    THERMOSTAT_RAW_OFF,
    THERMOSTAT_RAW_ON,
    THERMOSTAT_STEP,
)
from .entity import FritzEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import FritzDeviceCoordinator

_LOGGER = logging.getLogger(__name__)

# Decoded target temperatures of the two special sethkrtsoll values.
TARGET_OFF = THERMOSTAT_RAW_OFF * 0.5
TARGET_ON = THERMOSTAT_RAW_ON * 0.5


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up climate entities for FRITZ!DECT thermostats."""
    coordinator: FritzDeviceCoordinator = hass.data[DOMAIN][entry.entry_id][
        "coordinator"
    ]

    entities = [
        FritzThermostatClimateEntity(coordinator, device)
        for device in coordinator.data.values()
        if device.has_feature(FEATURE_THERMOSTAT)
    ]
    async_add_entities(entities)


class FritzThermostatClimateEntity(FritzEntity, ClimateEntity):
    """Climate entity for FRITZ!DECT radiator thermostats.

    The router reports the target as half degrees; 253 means the valve is
    closed (off) and 254 means it is fully open (on).
    """

    _attr_name = None
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = THERMOSTAT_STEP
    _attr_min_temp = THERMOSTAT_MIN_TEMP
    _attr_max_temp = THERMOSTAT_MAX_TEMP
    _attr_hvac_modes = [HVACMode.HEAT, HVACMode.OFF]
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.TURN_OFF
        | ClimateEntityFeature.TURN_ON
    )

    def _state_snapshot(self) -> tuple[Any, ...]:
        return (self._device.thermostat,)

    @property
    def current_temperature(self) -> float | None:
        """Return the measured temperature."""
        if self._device.thermostat is None:
            return None
        return self._device.thermostat.current_temperature

    @property
    def target_temperature(self) -> float | None:
        """Return the target temperature, None while the valve is closed."""
        if self._device.thermostat is None:
            return None
        target = self._device.thermostat.target_temperature
        if target == TARGET_OFF:
            return None
        if target == TARGET_ON:
            return THERMOSTAT_MAX_TEMP
        return target

    @property
    def hvac_mode(self) -> HVACMode | None:
        if self._device.thermostat is None:
            return None
        if self._device.thermostat.target_temperature == TARGET_OFF:
            return HVACMode.OFF
        return HVACMode.HEAT

    async def async_set_temperature(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Set the target temperature.

        Args:
            **kwargs: Keyword arguments containing temperature data.

        """
        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            _LOGGER.warning("No temperature provided for %s", self._device.name)
            return

        await self._async_run_command(
            "target temperature",
            temperature,
            self.coordinator.client.async_set_target_temperature(
                self._ain, temperature
            ),
        )

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set the HVAC mode.

        Args:
            hvac_mode: HEAT opens the valve, OFF closes it.

        """
        if hvac_mode == HVACMode.OFF:
            command = self.coordinator.client.async_set_thermostat_off(self._ain)
        else:
            command = self.coordinator.client.async_set_thermostat_on(self._ain)
        await self._async_run_command("hvac mode", hvac_mode, command)

    async def async_turn_on(self) -> None:
        await self.async_set_hvac_mode(HVACMode.HEAT)

    async def async_turn_off(self) -> None:
        await self.async_set_hvac_mode(HVACMode.OFF)
