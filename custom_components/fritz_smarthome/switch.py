"""Switch entities for FRITZ!DECT smart plugs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.switch import SwitchDeviceClass, SwitchEntity

from .const import DOMAIN, FEATURE_SMART_PLUG
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
    """Set up switch entities for FRITZ!DECT smart plugs."""
    coordinator: FritzDeviceCoordinator = hass.data[DOMAIN][entry.entry_id][
        "coordinator"
    ]

    async_add_entities(
        FritzSmartPlugSwitch(coordinator, device)
        for device in coordinator.data.values()
        if device.has_feature(FEATURE_SMART_PLUG)
    )


class FritzSmartPlugSwitch(FritzEntity, SwitchEntity):
    """Relay of a FRITZ!DECT 200/210 style smart plug."""

    _attr_name = None
    _attr_device_class = SwitchDeviceClass.OUTLET

    def _state_snapshot(self) -> tuple[Any, ...]:
        return (self._device.switch,)

    @property
    def is_on(self) -> bool | None:
        if self._device.switch is None:
            return None
        return self._device.switch.state

    async def async_turn_on(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._async_run_command(
            "state", True, self.coordinator.client.async_set_switch(self._ain, True)
        )

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._async_run_command(
            "state", False, self.coordinator.client.async_set_switch(self._ain, False)
        )
