"""Base entity for FRITZ!Box Smart Home devices."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Any

from homeassistant.core import callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER
from .coordinator import FritzDeviceCoordinator
from .errors import FritzApiClientError
from .models import FritzDeviceInfo

_LOGGER = logging.getLogger(__name__)


class FritzEntity(CoordinatorEntity[FritzDeviceCoordinator]):
    """Typed view on one device of the coordinator's device list.

    The entity keeps the last device info seen for its AIN, so a failed poll
    or a device missing from one list leaves the state untouched. State is
    only written when the fields the entity exposes actually changed.
    """

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: FritzDeviceCoordinator,
        device: FritzDeviceInfo,
        key: str | None = None,
    ) -> None:
        super().__init__(coordinator)
        self._ain = device.identifier
        self._device = device
        self._attr_unique_id = f"{device.identifier}_{key}" if key else device.identifier
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, device.identifier)},
            name=device.name,
            manufacturer=device.manufacturer or MANUFACTURER,
            model=device.product_name,
            sw_version=device.firmware_version or None,
        )
        self._last_snapshot = self._snapshot()

    @property
    def device(self) -> FritzDeviceInfo:
        """Return the latest device info for this entity."""
        return self._device

    @property
    def available(self) -> bool:
        return self._device.present

    def _state_snapshot(self) -> tuple[Any, ...]:
        """Return the device fields this entity exposes."""
        return ()

    def _snapshot(self) -> tuple[Any, ...]:
        return (self._device.present, self._device.name, *self._state_snapshot())

    @callback
    def _handle_coordinator_update(self) -> None:
        device = (self.coordinator.data or {}).get(self._ain)
        if device is None:
            _LOGGER.debug("%s: Not part of the latest device list", self._ain)
            return

        self._device = device
        snapshot = self._snapshot()
        if snapshot == self._last_snapshot:
            return

        self._last_snapshot = snapshot
        self.async_write_ha_state()

    async def _async_run_command(
        self,
        property_name: str,
        value: Any,  # noqa: ANN401
        command: Awaitable[Any],
    ) -> None:
        """Await a device command and reject the operation if it fails.

        Raises:
            HomeAssistantError: If the router rejected or never received the
                command.

        """
        _LOGGER.debug(
            "Set value of %s / %s to %s", self._device.name, property_name, value
        )
        try:
            await command
        except FritzApiClientError as err:
            _LOGGER.error(
                "Could not set %s of %s to %s: %s",
                property_name,
                self._device.name,
                value,
                err,
            )
            error_msg = f"Could not set {property_name} of {self._device.name}: {err}"
            raise HomeAssistantError(error_msg) from err

        await self.coordinator.async_request_refresh()
