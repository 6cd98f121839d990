"""
Configuration flow for the FRITZ!Box Smart Home integration.

This module handles the setup and re-authentication of the integration
through Home Assistant's config flow system. Credentials are checked with a
real login before an entry is created.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx
import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_HOST, CONF_PASSWORD, CONF_USERNAME
from homeassistant.helpers.httpx_client import get_async_client

from . import api
from .const import (
    CONF_DEBUG,
    CONF_POLL_INTERVAL,
    DEFAULT_DEBUG,
    DEFAULT_HOST,
    DEFAULT_POLL_INTERVAL,
    DOMAIN,
    ERROR_API_ERROR,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
)

_LOGGER = logging.getLogger(__name__)

USER_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST, default=DEFAULT_HOST): str,
        vol.Required(CONF_USERNAME): str,
        vol.Required(CONF_PASSWORD): str,
        vol.Optional(CONF_POLL_INTERVAL, default=DEFAULT_POLL_INTERVAL): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(CONF_DEBUG, default=DEFAULT_DEBUG): bool,
    }
)

REAUTH_SCHEMA = vol.Schema({vol.Required(CONF_PASSWORD): str})


class FritzSmartHomeConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle configuration flow for the FRITZ!Box Smart Home integration."""

    VERSION = 1

    async def _async_try_login(
        self, host: str, username: str, password: str
    ) -> tuple[api.FritzClient | None, str | None]:
        """
        Log in once and map failures to form error keys.

        Args:
            host: Router host or base URL.
            username: Router user name.
            password: Router password.

        Returns:
            The logged in client, or None and the error key.

        """
        try:
            session = get_async_client(self.hass, verify_ssl=False)
            client = await api.FritzClient.async_login(
                session, host, username, password
            )
        except api.FritzAuthError as err:
            _LOGGER.warning("Authentication failed (%s): %s", ERROR_INVALID_AUTH, err)
            return None, ERROR_INVALID_AUTH
        except api.FritzNetworkError as err:
            if isinstance(err.__cause__, httpx.TimeoutException):
                _LOGGER.exception("Timeout error (%s)", ERROR_TIMEOUT)
                return None, ERROR_TIMEOUT
            _LOGGER.exception("Connection error (%s)", ERROR_CANNOT_CONNECT)
            return None, ERROR_CANNOT_CONNECT
        except api.FritzApiClientError:
            _LOGGER.exception("API client error (%s)", ERROR_API_ERROR)
            return None, ERROR_API_ERROR
        except Exception:
            _LOGGER.exception(
                "Unexpected error during authentication (%s)",
                ERROR_UNKNOWN,
            )
            return None, ERROR_UNKNOWN

        _LOGGER.info("Successfully logged in to %s", client.host)
        return client, None

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """
        Handle the initial step of the config flow.

        Args:
            user_input: User input data containing router address and
                credentials.

        Returns:
            ConfigFlowResult indicating the next step or errors.

        """
        errors: dict[str, str] = {}

        if user_input is not None:
            client, error = await self._async_try_login(
                user_input[CONF_HOST],
                user_input[CONF_USERNAME],
                user_input[CONF_PASSWORD],
            )
            if client is None:
                errors["base"] = error or ERROR_UNKNOWN
            else:
                username = user_input[CONF_USERNAME]
                await self.async_set_unique_id(f"{client.host}_{username}".lower())
                self._abort_if_unique_id_configured()

                return self.async_create_entry(
                    title=f"FRITZ!Box ({username}@{client.host})",
                    data={**user_input, CONF_HOST: client.host},
                )

        return self.async_show_form(
            step_id="user",
            data_schema=USER_SCHEMA,
            errors=errors,
        )

    async def async_step_reauth(
        self, entry_data: Mapping[str, Any]
    ) -> ConfigFlowResult:
        """Start re-authentication after the stored password was rejected."""
        return await self.async_step_reauth_confirm()

    async def async_step_reauth_confirm(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Ask for a new password and check it with a login."""
        errors: dict[str, str] = {}
        entry = self._get_reauth_entry()

        if user_input is not None:
            client, error = await self._async_try_login(
                entry.data[CONF_HOST],
                entry.data[CONF_USERNAME],
                user_input[CONF_PASSWORD],
            )
            if client is None:
                errors["base"] = error or ERROR_UNKNOWN
            else:
                return self.async_update_reload_and_abort(
                    entry,
                    data_updates={CONF_PASSWORD: user_input[CONF_PASSWORD]},
                )

        return self.async_show_form(
            step_id="reauth_confirm",
            data_schema=REAUTH_SCHEMA,
            description_placeholders={CONF_USERNAME: entry.data[CONF_USERNAME]},
            errors=errors,
        )
