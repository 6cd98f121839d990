"""API client for the FRITZ!Box AHA (home automation) HTTP interface.

This module provides the challenge-response login against login_sid.lua and
a client that invokes AHA commands on homeautoswitch.lua with the resulting
session id.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx
from homeassistant.helpers.httpx_client import create_async_httpx_client

from .const import (
    HOMEAUTO_PATH,
    INVALID_SESSION_ID,
    LOGIN_PATH,
    REQUEST_TIMEOUT,
    RIGHT_HOMEAUTO,
    THERMOSTAT_RAW_OFF,
    THERMOSTAT_RAW_ON,
)
from .errors import (
    FritzApiClientError,
    FritzAuthError,
    FritzCommandError,
    FritzNetworkError,
    FritzParseError,
)
from .models import FritzColorDefaults, FritzDeviceInfo, FritzSession, FritzSessionInfo
from .parser import parse_color_defaults, parse_device_list, parse_session_info

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403


def normalize_host(host: str) -> str:
    """Return the router base URL with a scheme and without a trailing slash.

    Args:
        host: Hostname, IP address or URL as entered by the user.

    Returns:
        Base URL such as "http://fritz.box".

    """
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"http://{host}"
    return host


def compute_challenge_response(challenge: str, password: str) -> str:
    """Compute the login response for a router challenge.

    The router expects the MD5 digest of the UTF-16LE encoded string
    "<challenge>-<password>", prefixed with the challenge.

    Args:
        challenge: Challenge string from login_sid.lua.
        password: Plain text password of the router user.

    Returns:
        Response string "<challenge>-<md5 hexdigest>".

    """
    digest = hashlib.md5(  # noqa: S324
        f"{challenge}-{password}".encode("utf-16le")
    ).hexdigest()
    return f"{challenge}-{digest}"


def build_query(params: Mapping[str, Any]) -> str:
    """Join parameters into a query string.

    Values are inserted as-is; only the first space of the resulting string
    is removed. AINs reported with an embedded space therefore still work,
    but values containing reserved URL characters are not encoded.

    Args:
        params: Query parameters in insertion order.

    Returns:
        Query string without the leading "?".

    """
    query = "&".join(f"{key}={value}" for key, value in params.items())
    return query.replace(" ", "", 1)


def is_http_error(status: int) -> bool:
    return status >= HTTP_BAD_REQUEST


def is_auth_error(status: int) -> bool:
    return status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN)


def validate_response(
    response: httpx.Response,
    error_cls: type[FritzApiClientError] = FritzApiClientError,
) -> str:
    """Validate HTTP response and return its body.

    Args:
        response: HTTP response object to validate.
        error_cls: Exception raised for non-authentication HTTP errors.

    Returns:
        Response body as text.

    Raises:
        FritzAuthError: If the router rejected the session.
        FritzApiClientError: If the request failed for another reason.

    """
    if is_http_error(response.status_code):
        if is_auth_error(response.status_code):
            auth_error = f"Session rejected by router: {response.status_code}"
            raise FritzAuthError(auth_error)

        client_error = f"Request failed: {response.status_code}"
        raise error_cls(client_error)

    return response.text


def create_session_client(hass: HomeAssistant) -> httpx.AsyncClient:
    """Create HTTP client for talking to the router.

    Routers serve self-signed certificates, so certificate verification is
    disabled.

    Args:
        hass: Home Assistant instance.

    Returns:
        Configured httpx AsyncClient.

    """
    return create_async_httpx_client(
        hass,
        verify_ssl=False,
        timeout=REQUEST_TIMEOUT,
    )


async def _async_get(
    session: httpx.AsyncClient,
    url: str,
    params: Mapping[str, str] | None = None,
) -> httpx.Response:
    try:
        return await session.get(url, params=params)
    except httpx.RequestError as err:
        error_msg = f"Error communicating with {url.split('?', 1)[0]}: {err}"
        raise FritzNetworkError(error_msg) from err


async def async_get_challenge(session: httpx.AsyncClient, host: str) -> str:
    """Fetch a login challenge from the router.

    Args:
        session: HTTP client session.
        host: Router base URL.

    Returns:
        Challenge string.

    Raises:
        FritzNetworkError: If the router cannot be reached.
        FritzParseError: If the response carries no challenge.

    """
    _LOGGER.debug("Requesting login challenge from %s", host)
    response = await _async_get(session, f"{host}{LOGIN_PATH}")
    info = parse_session_info(validate_response(response))

    if not info.challenge:
        error_msg = "Session info does not contain a challenge"
        raise FritzParseError(error_msg)
    if info.block_time:
        _LOGGER.warning(
            "Router %s blocks logins for another %d seconds", host, info.block_time
        )
    return info.challenge


async def async_create_session(
    session: httpx.AsyncClient,
    host: str,
    username: str,
    password: str,
    challenge: str,
) -> FritzSessionInfo:
    """Answer a login challenge and return the resulting session info.

    Args:
        session: HTTP client session.
        host: Router base URL.
        username: Router user name.
        password: Router password.
        challenge: Challenge from async_get_challenge.

    Returns:
        Decoded session info; the session id is all zeros on bad credentials.

    Raises:
        FritzNetworkError: If the router cannot be reached.
        FritzParseError: If the response is not a session info document.

    """
    params = {
        "username": username,
        "response": compute_challenge_response(challenge, password),
    }
    response = await _async_get(session, f"{host}{LOGIN_PATH}", params=params)
    return parse_session_info(validate_response(response))


async def async_login(
    session: httpx.AsyncClient,
    host: str,
    username: str,
    password: str,
) -> FritzSession:
    """Log in to the router with a challenge-response exchange.

    A user without the HomeAuto right still gets a session; the missing right
    is logged as a warning because device calls will then be rejected.

    Args:
        session: HTTP client session.
        host: Router host or base URL.
        username: Router user name.
        password: Router password.

    Returns:
        The authenticated session.

    Raises:
        FritzAuthError: If the credentials are rejected.
        FritzNetworkError: If the router cannot be reached.
        FritzParseError: If a response has an unexpected shape.

    """
    host = normalize_host(host)
    challenge = await async_get_challenge(session, host)
    info = await async_create_session(session, host, username, password, challenge)

    if info.session_id == INVALID_SESSION_ID:
        error_msg = "invalid credentials"
        raise FritzAuthError(error_msg)

    if RIGHT_HOMEAUTO not in info.rights:
        _LOGGER.warning(
            "User %s on %s lacks the %s right: %s",
            username,
            host,
            RIGHT_HOMEAUTO,
            FritzAuthError("insufficient rights"),
        )

    _LOGGER.debug("Logged in to %s as %s", host, username)
    return FritzSession(host=host, session_id=info.session_id, rights=info.rights)


class FritzClient:
    """Invokes AHA commands with an explicit session.

    The session is held by the instance, so several clients never share state.
    """

    def __init__(self, session: httpx.AsyncClient, fritz_session: FritzSession) -> None:
        self._session = session
        self.fritz_session = fritz_session

    @property
    def host(self) -> str:
        return self.fritz_session.host

    @property
    def session_id(self) -> str:
        return self.fritz_session.session_id

    @classmethod
    async def async_login(
        cls,
        session: httpx.AsyncClient,
        host: str,
        username: str,
        password: str,
    ) -> FritzClient:
        """Log in and return a client bound to the new session."""
        return cls(session, await async_login(session, host, username, password))

    async def async_invoke(
        self,
        method: str,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Invoke an AHA command and return the raw response body.

        Args:
            method: AHA command name (switchcmd).
            params: Additional command parameters such as ain.

        Returns:
            Response body as text.

        Raises:
            FritzNetworkError: If the router cannot be reached.
            FritzAuthError: If the session is no longer valid.
            FritzCommandError: If the router rejects the command.

        """
        query = build_query({**(params or {}), "switchcmd": method, "sid": self.session_id})
        url = f"{self.host}{HOMEAUTO_PATH}?{query}"

        _LOGGER.debug("Invoking %s with %s", method, params)
        response = await _async_get(self._session, url)
        return validate_response(response, FritzCommandError)

    async def async_get_device_infos(self) -> list[FritzDeviceInfo]:
        """Fetch and decode the state of all devices."""
        body = await self.async_invoke("getdevicelistinfos")
        return parse_device_list(body)

    async def async_get_color_defaults(self) -> FritzColorDefaults:
        """Fetch and decode the color presets of the router."""
        body = await self.async_invoke("getcolordefaults")
        return parse_color_defaults(body)

    async def async_set_simple_on_off(self, ain: str, on: bool) -> str:
        return await self.async_invoke(
            "setsimpleonoff", {"ain": ain, "onoff": 1 if on else 0}
        )

    async def async_set_level_percentage(self, ain: str, percent: int) -> str:
        return await self.async_invoke(
            "setlevelpercentage", {"ain": ain, "level": percent}
        )

    async def async_set_color(self, ain: str, hue: int, saturation: int) -> str:
        return await self.async_invoke(
            "setcolor",
            {"ain": ain, "hue": hue, "saturation": saturation, "duration": 0},
        )

    async def async_set_color_temperature(self, ain: str, kelvin: int) -> str:
        return await self.async_invoke(
            "setcolortemperature",
            {"ain": ain, "temperature": kelvin, "duration": 0},
        )

    async def async_set_switch(self, ain: str, on: bool) -> str:
        return await self.async_invoke(
            "setswitchon" if on else "setswitchoff", {"ain": ain}
        )

    async def async_set_target_temperature(self, ain: str, celsius: float) -> str:
        """Set a thermostat target in half-degree steps."""
        return await self.async_invoke(
            "sethkrtsoll", {"ain": ain, "param": round(celsius * 2)}
        )

    async def async_set_thermostat_off(self, ain: str) -> str:
        return await self.async_invoke(
            "sethkrtsoll", {"ain": ain, "param": THERMOSTAT_RAW_OFF}
        )

    async def async_set_thermostat_on(self, ain: str) -> str:
        return await self.async_invoke(
            "sethkrtsoll", {"ain": ain, "param": THERMOSTAT_RAW_ON}
        )
