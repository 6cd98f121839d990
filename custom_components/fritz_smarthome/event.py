"""Event entities for the buttons of FRITZ!DECT switches.

The router only reports the time of the last press per button. A press is
fired when that timestamp changes between two polls, so presses closer
together than the poll interval collapse into one event.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homeassistant.components.event import EventDeviceClass, EventEntity
from homeassistant.core import callback

from .const import ATTR_BUTTON_ID, DOMAIN, EVENT_BUTTON_PRESS
from .entity import FritzEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import FritzDeviceCoordinator
    from .models import FritzButton, FritzDeviceInfo

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up one event entity per button of every device."""
    coordinator: FritzDeviceCoordinator = hass.data[DOMAIN][entry.entry_id][
        "coordinator"
    ]

    async_add_entities(
        FritzButtonEvent(coordinator, device, button)
        for device in coordinator.data.values()
        for button in device.buttons
    )


class FritzButtonEvent(FritzEntity, EventEntity):
    """A single button of a FRITZ!DECT 440 or similar switch."""

    _attr_device_class = EventDeviceClass.BUTTON
    _attr_event_types = [EVENT_BUTTON_PRESS]

    def __init__(
        self,
        coordinator: FritzDeviceCoordinator,
        device: FritzDeviceInfo,
        button: FritzButton,
    ) -> None:
        self._button_id = button.id
        super().__init__(coordinator, device, button.id)
        self._attr_name = button.name

    def _state_snapshot(self) -> tuple[Any, ...]:
        return tuple(
            button.name
            for button in self._device.buttons
            if button.id == self._button_id
        )

    @callback
    def _handle_coordinator_update(self) -> None:
        pressed = self.coordinator.button_presses.get(self._ain, [])
        if self._button_id in pressed:
            _LOGGER.debug("%s: Firing press of button %s", self._ain, self._button_id)
            self._trigger_event(EVENT_BUTTON_PRESS, {ATTR_BUTTON_ID: self._button_id})
            self.async_write_ha_state()

        super()._handle_coordinator_update()
