"""Pytest configuration and fixtures for FRITZ!Box Smart Home tests."""

from collections.abc import Callable
from unittest.mock import AsyncMock, Mock

import pytest

from custom_components.fritz_smarthome.models import (
    FritzColorDefaults,
    FritzDeviceInfo,
)
from custom_components.fritz_smarthome.parser import (
    parse_color_defaults,
    parse_device_list,
)

DEVICE_LIST_XML = """<devicelist version="1" fwversion="7.21">
<device identifier="09995 0756387" id="20" functionbitmask="1048864"
        fwversion="05.21" manufacturer="AVM" productname="FRITZ!DECT 440">
  <present>1</present>
  <txbusy>0</txbusy>
  <name>Schalter 1</name>
  <battery>100</battery>
  <batterylow>0</batterylow>
  <temperature><celsius>225</celsius><offset>0</offset></temperature>
  <button identifier="09995 0756387-1" id="5000">
    <name>Schalter 1: Top right</name>
    <lastpressedtimestamp>1604710638</lastpressedtimestamp>
  </button>
  <button identifier="09995 0756387-3" id="5001">
    <name>Schalter 1: Bottom right</name>
    <lastpressedtimestamp>1602355181</lastpressedtimestamp>
  </button>
  <button identifier="09995 0756387-5" id="5002">
    <name>Schalter 1: Bottom left</name>
    <lastpressedtimestamp>1602355178</lastpressedtimestamp>
  </button>
  <button identifier="09995 0756387-7" id="5003">
    <name>Schalter 1: Top left</name>
    <lastpressedtimestamp>1604598916</lastpressedtimestamp>
  </button>
</device>
<device identifier="08761 0000434" id="17" functionbitmask="35712"
        fwversion="04.25" manufacturer="AVM" productname="FRITZ!DECT 200">
  <present>1</present>
  <txbusy>0</txbusy>
  <name>Steckdose</name>
  <switch><state>1</state><mode>manuell</mode><lock>0</lock><devicelock>0</devicelock></switch>
  <simpleonoff><state>1</state></simpleonoff>
  <powermeter><voltage>230051</voltage><power>1500</power><energy>45</energy></powermeter>
  <temperature><celsius>210</celsius><offset>-5</offset></temperature>
</device>
<device identifier="12701 0089238-1" id="2000" functionbitmask="237572"
        fwversion="0.0" manufacturer="AVM" productname="FRITZ!DECT 500">
  <present>1</present>
  <txbusy>0</txbusy>
  <name>Lampe</name>
  <simpleonoff><state>0</state></simpleonoff>
  <levelcontrol><level>128</level><levelpercentage>50</levelpercentage></levelcontrol>
  <colorcontrol supported_modes="5" current_mode="1">
    <hue>358</hue><saturation>180</saturation><temperature></temperature>
  </colorcontrol>
</device>
<device identifier="13979 0878454" id="16" functionbitmask="320"
        fwversion="04.94" manufacturer="AVM" productname="Comet DECT">
  <present>1</present>
  <txbusy>0</txbusy>
  <name>Heizung</name>
  <temperature><celsius>220</celsius><offset>0</offset></temperature>
  <hkr><tist>44</tist><tsoll>42</tsoll></hkr>
</device>
</devicelist>"""

COLOR_DEFAULTS_XML = """<colordefaults>
<hsdefaults>
  <hs hue_index="1">
    <name enum="5569">Rot</name>
    <color sat_index="1" hue="358" sat="180" val="230"/>
    <color sat_index="2" hue="358" sat="112" val="237"/>
    <color sat_index="3" hue="358" sat="54" val="245"/>
  </hs>
  <hs hue_index="2">
    <name enum="5570">Orange</name>
    <color sat_index="1" hue="35" sat="214" val="252"/>
    <color sat_index="2" hue="35" sat="140" val="252"/>
  </hs>
</hsdefaults>
<temperaturedefaults>
  <temp value="2700"/>
  <temp value="3000"/>
  <temp value="4200"/>
  <temp value="6500"/>
</temperaturedefaults>
</colordefaults>"""


def _build_session_info_xml(
    sid: str = "0000000000000000",
    challenge: str = "1234567z",
    rights: tuple[str, ...] = (),
    block_time: int = 0,
) -> str:
    """Build a login_sid.lua response body.

    Args:
        sid: Session id reported by the router.
        challenge: Challenge for the next login.
        rights: Names of the rights granted to the user.
        block_time: Seconds the router blocks further logins.

    Returns:
        XML session info document.

    """
    rights_xml = "".join(f"<Name>{name}</Name><Access>2</Access>" for name in rights)
    return (
        f"<SessionInfo><SID>{sid}</SID><Challenge>{challenge}</Challenge>"
        f"<BlockTime>{block_time}</BlockTime><Rights>{rights_xml}</Rights>"
        "</SessionInfo>"
    )


@pytest.fixture
def session_info_xml() -> Callable[..., str]:
    """Fixture providing a builder for login_sid.lua bodies."""
    return _build_session_info_xml


@pytest.fixture
def device_list_xml() -> str:
    """Fixture providing a getdevicelistinfos body with four devices."""
    return DEVICE_LIST_XML


@pytest.fixture
def color_defaults_xml() -> str:
    """Fixture providing a getcolordefaults body."""
    return COLOR_DEFAULTS_XML


@pytest.fixture
def devices() -> dict[str, FritzDeviceInfo]:
    """Fixture providing the decoded sample devices keyed by AIN."""
    return {device.identifier: device for device in parse_device_list(DEVICE_LIST_XML)}


@pytest.fixture
def color_defaults() -> FritzColorDefaults:
    """Fixture providing the decoded sample color presets."""
    return parse_color_defaults(COLOR_DEFAULTS_XML)


@pytest.fixture
def mock_client() -> Mock:
    """Create a mock FritzClient with async command methods."""
    client = Mock()
    client.host = "http://fritz.box"
    client.async_get_device_infos = AsyncMock()
    client.async_get_color_defaults = AsyncMock()
    client.async_set_simple_on_off = AsyncMock(return_value="")
    client.async_set_level_percentage = AsyncMock(return_value="")
    client.async_set_color = AsyncMock(return_value="")
    client.async_set_color_temperature = AsyncMock(return_value="")
    client.async_set_switch = AsyncMock(return_value="1")
    client.async_set_target_temperature = AsyncMock(return_value="")
    client.async_set_thermostat_off = AsyncMock(return_value="")
    client.async_set_thermostat_on = AsyncMock(return_value="")
    return client


@pytest.fixture
def mock_coordinator(
    mock_client: Mock,
    devices: dict[str, FritzDeviceInfo],
    color_defaults: FritzColorDefaults,
) -> Mock:
    """Create a mock device coordinator holding the sample devices."""
    coordinator = Mock()
    coordinator.data = devices
    coordinator.client = mock_client
    coordinator.color_defaults = color_defaults
    coordinator.button_presses = {}
    coordinator.async_add_listener = Mock(return_value=Mock())
    coordinator.async_request_refresh = AsyncMock()
    return coordinator


@pytest.fixture
def mock_hass(mock_coordinator: Mock) -> Mock:
    """Create a mock Home Assistant instance with one loaded entry."""
    hass = Mock()
    hass.data = {
        "fritz_smarthome": {
            "test_entry": {
                "session": Mock(),
                "client": mock_coordinator.client,
                "coordinator": mock_coordinator,
            },
        },
    }
    return hass


@pytest.fixture
def mock_entry() -> Mock:
    """Create a mock config entry matching mock_hass."""
    entry = Mock()
    entry.entry_id = "test_entry"
    return entry
