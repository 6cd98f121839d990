"""Light entities for FRITZ!DECT bulbs."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from homeassistant.components.light import ATTR_BRIGHTNESS, ColorMode, LightEntity
from homeassistant.util.color import brightness_to_value, value_to_brightness

from .const import DOMAIN, FEATURE_DIMMABLE_LIGHT, FEATURE_LIGHT
from .entity import FritzEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import FritzDeviceCoordinator
    from .models import FritzDeviceInfo

_LOGGER = logging.getLogger(__name__)

BRIGHTNESS_SCALE = (1, 100)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up light entities for FRITZ!DECT bulbs."""
    coordinator: FritzDeviceCoordinator = hass.data[DOMAIN][entry.entry_id][
        "coordinator"
    ]

    async_add_entities(
        FritzBulbLight(coordinator, device)
        for device in coordinator.data.values()
        if device.has_feature(FEATURE_LIGHT)
    )


class FritzBulbLight(FritzEntity, LightEntity):
    """A FRITZ!DECT bulb switched via setsimpleonoff.

    Color presets are exposed by the select platform.
    """

    _attr_name = None

    def __init__(
        self,
        coordinator: FritzDeviceCoordinator,
        device: FritzDeviceInfo,
    ) -> None:
        super().__init__(coordinator, device)
        if device.has_feature(FEATURE_DIMMABLE_LIGHT):
            self._attr_color_mode = ColorMode.BRIGHTNESS
        else:
            self._attr_color_mode = ColorMode.ONOFF
        self._attr_supported_color_modes = {self._attr_color_mode}
        _LOGGER.debug("%s: Using color mode %s", device.name, self._attr_color_mode)

    def _state_snapshot(self) -> tuple[Any, ...]:
        return (self._device.simpleonoff, self._device.levelcontrol)

    @property
    def is_on(self) -> bool | None:
        if self._device.simpleonoff is None:
            return None
        return self._device.simpleonoff.state

    @property
    def brightness(self) -> int | None:
        """Return the brightness between 0..255, from the level in percent."""
        if self._device.levelcontrol is None:
            return None
        return value_to_brightness(
            BRIGHTNESS_SCALE, self._device.levelcontrol.levelpercentage
        )

    async def async_turn_on(self, **kwargs: Any) -> None:  # noqa: ANN401
        client = self.coordinator.client

        if ATTR_BRIGHTNESS in kwargs:
            percent = math.ceil(
                brightness_to_value(BRIGHTNESS_SCALE, kwargs[ATTR_BRIGHTNESS])
            )
            await self._async_run_command(
                "brightness",
                percent,
                client.async_set_level_percentage(self._ain, percent),
            )

        await self._async_run_command(
            "on", True, client.async_set_simple_on_off(self._ain, True)
        )

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._async_run_command(
            "on",
            False,
            self.coordinator.client.async_set_simple_on_off(self._ain, False),
        )
