from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_HOST, CONF_PASSWORD, CONF_USERNAME, Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import api
from .api import create_session_client
from .const import CONF_DEBUG, DOMAIN, FEATURE_COLOR_LIGHT
from .coordinator import FritzDeviceCoordinator
from .models import FritzColorDefaults

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [
    Platform.BINARY_SENSOR,
    Platform.CLIMATE,
    Platform.EVENT,
    Platform.LIGHT,
    Platform.SELECT,
    Platform.SENSOR,
    Platform.SWITCH,
]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Setting up FRITZ!Box Smart Home for entry %s", entry.entry_id)

    if entry.data.get(CONF_DEBUG):
        logging.getLogger(__package__).setLevel(logging.DEBUG)

    session = create_session_client(hass)

    try:
        _LOGGER.debug("Logging in to %s", entry.data[CONF_HOST])
        client = await api.FritzClient.async_login(
            session,
            entry.data[CONF_HOST],
            entry.data[CONF_USERNAME],
            entry.data[CONF_PASSWORD],
        )
    except api.FritzAuthError as err:
        _LOGGER.error(
            "Authentication failed for entry %s: %s", entry.entry_id, str(err)
        )
        return False
    except api.FritzApiClientError as err:
        error_msg = f"Could not reach {entry.data[CONF_HOST]}: {err}"
        _LOGGER.warning(error_msg)
        raise ConfigEntryNotReady(error_msg) from err

    coordinator = FritzDeviceCoordinator(hass, session, client, entry)
    await coordinator.async_config_entry_first_refresh()
    _LOGGER.info(
        "Successfully retrieved %d devices from %s",
        len(coordinator.data),
        client.host,
    )

    if any(
        device.has_feature(FEATURE_COLOR_LIGHT)
        for device in coordinator.data.values()
    ):
        coordinator.color_defaults = await _async_get_color_defaults(coordinator)

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "session": session,
        "client": client,
        "coordinator": coordinator,
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    _LOGGER.info(
        "Successfully setup FRITZ!Box Smart Home for entry %s", entry.entry_id
    )
    return True


async def _async_get_color_defaults(
    coordinator: FritzDeviceCoordinator,
) -> FritzColorDefaults:
    try:
        defaults = await coordinator.client.async_get_color_defaults()
    except api.FritzApiClientError as err:
        _LOGGER.warning("Could not load color presets, colors disabled: %s", err)
        return FritzColorDefaults()

    _LOGGER.debug(
        "Loaded %d color presets and %d color temperatures",
        len(defaults.colors),
        len(defaults.color_temperatures),
    )
    return defaults


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Unloading FRITZ!Box Smart Home for entry %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        if DOMAIN in hass.data and entry.entry_id in hass.data[DOMAIN]:
            hass.data[DOMAIN].pop(entry.entry_id)
            _LOGGER.debug("Cleaned up data for entry %s", entry.entry_id)
    else:
        _LOGGER.warning("Failed to unload some platforms for entry %s", entry.entry_id)

    return unload_ok
