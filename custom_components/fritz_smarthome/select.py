"""Select entities for the color presets of FRITZ!DECT color bulbs.

The router only accepts the hue/saturation pairs and color temperatures of
its getcolordefaults table, so colors are offered as named presets.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homeassistant.components.select import SelectEntity
from homeassistant.exceptions import HomeAssistantError

from .const import DOMAIN, FEATURE_COLOR_LIGHT
from .entity import FritzEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import FritzDeviceCoordinator
    from .models import FritzDeviceInfo

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up color preset selects for FRITZ!DECT color bulbs."""
    coordinator: FritzDeviceCoordinator = hass.data[DOMAIN][entry.entry_id][
        "coordinator"
    ]
    defaults = coordinator.color_defaults

    entities: list[SelectEntity] = []
    for device in coordinator.data.values():
        if not device.has_feature(FEATURE_COLOR_LIGHT):
            continue
        if defaults.colors:
            entities.append(FritzColorSelect(coordinator, device))
        if defaults.color_temperatures:
            entities.append(FritzColorTemperatureSelect(coordinator, device))

    async_add_entities(entities)


class FritzColorSelect(FritzEntity, SelectEntity):
    """Color preset of a bulb, matched exactly on hue and saturation."""

    _attr_name = "Color"
    _attr_icon = "mdi:palette"

    def __init__(
        self,
        coordinator: FritzDeviceCoordinator,
        device: FritzDeviceInfo,
    ) -> None:
        super().__init__(coordinator, device, "color")
        self._attr_options = [color.name for color in coordinator.color_defaults.colors]

    def _state_snapshot(self) -> tuple[Any, ...]:
        return (self._device.colorcontrol,)

    @property
    def current_option(self) -> str | None:
        colorcontrol = self._device.colorcontrol
        if colorcontrol is None or colorcontrol.color is None:
            return None

        color = colorcontrol.color
        preset = self.coordinator.color_defaults.find_preset(color.hue, color.sat)
        if preset is None:
            _LOGGER.debug(
                "%s: No color preset for hue %d and saturation %d",
                self._device.name,
                color.hue,
                color.sat,
            )
            return None
        return preset.name

    async def async_select_option(self, option: str) -> None:
        preset = self.coordinator.color_defaults.get_preset(option)
        if preset is None or not preset.colors:
            error_msg = f"Unknown color preset: {option}"
            raise HomeAssistantError(error_msg)

        color = preset.colors[0]
        await self._async_run_command(
            "color",
            option,
            self.coordinator.client.async_set_color(self._ain, color.hue, color.sat),
        )


class FritzColorTemperatureSelect(FritzEntity, SelectEntity):
    """Color temperature preset of a bulb in Kelvin."""

    _attr_name = "Color temperature"
    _attr_icon = "mdi:thermometer"

    def __init__(
        self,
        coordinator: FritzDeviceCoordinator,
        device: FritzDeviceInfo,
    ) -> None:
        super().__init__(coordinator, device, "color_temperature")
        self._attr_options = [
            str(temperature.kelvin)
            for temperature in coordinator.color_defaults.color_temperatures
        ]

    def _state_snapshot(self) -> tuple[Any, ...]:
        return (self._device.colorcontrol,)

    @property
    def current_option(self) -> str | None:
        colorcontrol = self._device.colorcontrol
        if colorcontrol is None or colorcontrol.temperature is None:
            return None
        return str(colorcontrol.temperature)

    async def async_select_option(self, option: str) -> None:
        await self._async_run_command(
            "color temperature",
            option,
            self.coordinator.client.async_set_color_temperature(self._ain, int(option)),
        )
