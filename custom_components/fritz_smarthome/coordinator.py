"""Coordinator for the FRITZ!Box Smart Home integration."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from homeassistant.const import CONF_HOST, CONF_PASSWORD, CONF_USERNAME
from homeassistant.exceptions import ConfigEntryAuthFailed
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from . import api
from .const import CONF_POLL_INTERVAL, DEFAULT_POLL_INTERVAL, DOMAIN
from .models import FritzColorDefaults, FritzDeviceInfo

if TYPE_CHECKING:
    import httpx
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)


class FritzDeviceCoordinator(DataUpdateCoordinator[dict[str, FritzDeviceInfo]]):
    """Coordinator that polls the device list and notifies every entity.

    Each poll rebuilds the whole mapping of AIN to device info. Listeners are
    not pre-routed; entities pick their own device out of ``data``.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        session: httpx.AsyncClient,
        client: api.FritzClient,
        config_entry: ConfigEntry,
        color_defaults: FritzColorDefaults | None = None,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=f"{DOMAIN}_devices",
            update_interval=timedelta(
                seconds=config_entry.data.get(CONF_POLL_INTERVAL, DEFAULT_POLL_INTERVAL)
            ),
        )
        self.session = session
        self.client = client
        self.color_defaults = color_defaults or FritzColorDefaults()
        self.button_presses: dict[str, list[str]] = {}
        self._button_timestamps: dict[tuple[str, str], int | None] = {}
        self.data = {}

    async def _async_update_data(self) -> dict[str, FritzDeviceInfo]:
        self.button_presses = {}
        try:
            devices = await self._async_fetch_with_relogin()
        except api.FritzParseError as err:
            raise UpdateFailed(f"Unexpected device list from router: {err}") from err
        except api.FritzNetworkError as err:
            raise UpdateFailed(f"Connection error while polling devices: {err}") from err
        except api.FritzApiClientError as err:
            raise UpdateFailed(f"API error while polling devices: {err}") from err

        _LOGGER.debug("Polled state for %d devices", len(devices))
        self.button_presses = self._detect_button_presses(devices)
        return {device.identifier: device for device in devices}

    async def _async_fetch_with_relogin(self) -> list[FritzDeviceInfo]:
        try:
            return await self.client.async_get_device_infos()
        except api.FritzAuthError as err:
            _LOGGER.info("Session rejected (%s), logging in again", err)

        await self._async_relogin()
        return await self.client.async_get_device_infos()

    async def _async_relogin(self) -> None:
        """Replace the client session with a fresh login.

        Raises:
            ConfigEntryAuthFailed: If the stored credentials are rejected.

        """
        data = self.config_entry.data
        try:
            self.client = await api.FritzClient.async_login(
                self.session,
                data[CONF_HOST],
                data[CONF_USERNAME],
                data[CONF_PASSWORD],
            )
        except api.FritzAuthError as err:
            error_msg = f"Re-authentication failed with stored credentials: {err}"
            _LOGGER.error(error_msg)
            raise ConfigEntryAuthFailed(error_msg) from err

        _LOGGER.info("Successfully logged in again to %s", self.client.host)

    def _detect_button_presses(
        self, devices: list[FritzDeviceInfo]
    ) -> dict[str, list[str]]:
        """Compare button timestamps with the previous poll.

        A button seen for the first time only records its baseline.

        Returns:
            Mapping of AIN to the ids of buttons pressed since the last poll.

        """
        presses: dict[str, list[str]] = {}
        for device in devices:
            for button in device.buttons:
                key = (device.identifier, button.id)
                timestamp = button.last_pressed_timestamp
                known = key in self._button_timestamps
                previous = self._button_timestamps.get(key)
                self._button_timestamps[key] = timestamp

                if known and timestamp is not None and timestamp != previous:
                    _LOGGER.debug(
                        "Button %s of %s pressed at %s",
                        button.id,
                        device.name,
                        timestamp,
                    )
                    presses.setdefault(device.identifier, []).append(button.id)
        return presses
