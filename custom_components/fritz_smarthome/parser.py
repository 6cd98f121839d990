"""XML decoding for FRITZ!Box AHA responses.

The router answers every AHA call with an XML body. This module turns those
bodies into the immutable models from ``models.py``:

    login_sid.lua           -> FritzSessionInfo
    getdevicelistinfos      -> list[FritzDeviceInfo]
    getcolordefaults        -> FritzColorDefaults

Device elements carry a ``functionbitmask`` attribute whose set bits name the
capabilities of the device, and one optional child element per capability
(``switch``, ``hkr``, ``colorcontrol``, ...). A capability record is only
decoded when its element and the nested values are present; absence is kept
as ``None`` so that callers can tell "not reported" from "zero".

Scaling applied while decoding:
    temperature celsius/offset   tenths of a degree  -> / 10
    hkr tist/tsoll               half degrees         -> * 0.5
    powermeter voltage/power     mV / mW              -> / 1000
    powermeter energy            Wh                   -> unscaled
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from .const import (
    COLOR_MODE_COLOR_TEMPERATURE,
    COLOR_MODE_HUE_SAT,
    FEATURE_RESERVED,
    FEATURES,
)
from .errors import FritzParseError
from .models import (
    ColorControlState,
    FritzButton,
    FritzColor,
    FritzColorDefaults,
    FritzColorTemperature,
    FritzDeviceInfo,
    FritzMainColor,
    FritzSessionInfo,
    HueSaturation,
    LevelControlState,
    PowerMeterState,
    SimpleOnOffState,
    SwitchState,
    TemperatureState,
    ThermostatState,
)

_LOGGER = logging.getLogger(__name__)


def _parse_xml(body: str, root_tag: str) -> ET.Element:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as err:
        error_msg = f"Malformed XML response: {err}"
        raise FritzParseError(error_msg) from err

    if root.tag != root_tag:
        error_msg = f"Unexpected XML root element <{root.tag}>, expected <{root_tag}>"
        raise FritzParseError(error_msg)
    return root


def _text(element: ET.Element, tag: str) -> str | None:
    """Return the stripped text of a child element, or None if empty or absent."""
    child = element.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None


def _to_int(value: str, field_name: str) -> int:
    try:
        return int(value)
    except ValueError as err:
        error_msg = f"Invalid integer for {field_name}: {value!r}"
        raise FritzParseError(error_msg) from err


def _child_int(element: ET.Element, tag: str) -> int | None:
    value = _text(element, tag)
    if value is None:
        return None
    return _to_int(value, tag)


def _attr_int(element: ET.Element, name: str) -> int:
    value = element.get(name)
    if value is None or not value.strip():
        error_msg = f"Missing attribute {name!r} on <{element.tag}>"
        raise FritzParseError(error_msg)
    return _to_int(value.strip(), name)


def normalize_ain(identifier: str) -> str:
    """Remove all whitespace from an AIN ("11630 0123456" -> "116300123456")."""
    return "".join(identifier.split())


def decode_features(mask: int) -> frozenset[str]:
    """Decode a functionbitmask into the set of feature names.

    Reserved positions and bits beyond the feature table are ignored.
    """
    return frozenset(
        name
        for position, name in enumerate(FEATURES)
        if mask & (1 << position) and name != FEATURE_RESERVED
    )


def parse_session_info(body: str) -> FritzSessionInfo:
    """Decode a login_sid.lua response."""
    root = _parse_xml(body, "SessionInfo")

    session_id = _text(root, "SID")
    if session_id is None:
        error_msg = "Session info does not contain a SID"
        raise FritzParseError(error_msg)

    block_time = _child_int(root, "BlockTime") or 0
    rights = tuple(
        name.text.strip()
        for name in root.findall("Rights/Name")
        if name.text and name.text.strip()
    )
    return FritzSessionInfo(
        session_id=session_id,
        challenge=_text(root, "Challenge") or "",
        block_time=block_time,
        rights=rights,
    )


def _decode_simple_on_off(device: ET.Element) -> SimpleOnOffState | None:
    element = device.find("simpleonoff")
    if element is None:
        return None
    state = _text(element, "state")
    if state is None:
        return None
    return SimpleOnOffState(state=state == "1")


def _decode_temperature(device: ET.Element) -> TemperatureState | None:
    element = device.find("temperature")
    if element is None:
        return None
    celsius = _child_int(element, "celsius")
    offset = _child_int(element, "offset")
    if celsius is None or offset is None:
        return None
    return TemperatureState(celsius=celsius / 10, offset=offset / 10)


def _decode_level_control(device: ET.Element) -> LevelControlState | None:
    element = device.find("levelcontrol")
    if element is None:
        return None
    level = _child_int(element, "level")
    levelpercentage = _child_int(element, "levelpercentage")
    if level is None or levelpercentage is None:
        return None
    return LevelControlState(level=level, levelpercentage=levelpercentage)


def _decode_color_control(device: ET.Element) -> ColorControlState | None:
    """Decode the current bulb color, branching on the current_mode attribute."""
    element = device.find("colorcontrol")
    if element is None:
        return None
    current_mode = (element.get("current_mode") or "").strip()
    if not current_mode:
        return None

    mode = _to_int(current_mode, "current_mode")
    if mode == COLOR_MODE_HUE_SAT:
        hue = _child_int(element, "hue")
        sat = _child_int(element, "saturation")
        if hue is None or sat is None:
            return None
        return ColorControlState(color=HueSaturation(hue=hue, sat=sat))

    if mode == COLOR_MODE_COLOR_TEMPERATURE:
        temperature = _child_int(element, "temperature")
        if temperature is None:
            return None
        return ColorControlState(temperature=temperature)

    _LOGGER.debug("Ignoring unsupported color mode %d", mode)
    return None


def _decode_battery_low(device: ET.Element) -> bool | None:
    value = _text(device, "batterylow")
    if value is None:
        return None
    return value == "1"


def _decode_thermostat(device: ET.Element) -> ThermostatState | None:
    element = device.find("hkr")
    if element is None:
        return None
    tist = _child_int(element, "tist")
    tsoll = _child_int(element, "tsoll")
    if tist is None or tsoll is None:
        return None
    return ThermostatState(
        current_temperature=tist * 0.5,
        target_temperature=tsoll * 0.5,
    )


def _decode_switch(device: ET.Element) -> SwitchState | None:
    element = device.find("switch")
    if element is None:
        return None
    state = _text(element, "state")
    if state is None:
        return None
    return SwitchState(state=state == "1")


def _decode_power_meter(device: ET.Element) -> PowerMeterState | None:
    element = device.find("powermeter")
    if element is None:
        return None
    voltage = _child_int(element, "voltage")
    power = _child_int(element, "power")
    energy = _child_int(element, "energy")
    if voltage is None or power is None or energy is None:
        return None
    return PowerMeterState(voltage=voltage / 1000, power=power / 1000, energy=energy)


def _decode_buttons(device: ET.Element) -> tuple[FritzButton, ...]:
    buttons = []
    for element in device.findall("button"):
        button_id = (element.get("id") or "").strip()
        if not button_id:
            error_msg = "Button element without id"
            raise FritzParseError(error_msg)
        buttons.append(
            FritzButton(
                id=button_id,
                name=_text(element, "name") or "",
                last_pressed_timestamp=_child_int(element, "lastpressedtimestamp"),
            )
        )
    return tuple(buttons)


def _decode_device(device: ET.Element) -> FritzDeviceInfo:
    identifier = device.get("identifier")
    if identifier is None or not identifier.strip():
        error_msg = "Device element without identifier"
        raise FritzParseError(error_msg)

    present = _text(device, "present")
    return FritzDeviceInfo(
        identifier=normalize_ain(identifier),
        product_name=device.get("productname", ""),
        name=_text(device, "name") or "",
        features=decode_features(_attr_int(device, "functionbitmask")),
        manufacturer=device.get("manufacturer", ""),
        firmware_version=device.get("fwversion", ""),
        present=present != "0",
        simpleonoff=_decode_simple_on_off(device),
        temperature=_decode_temperature(device),
        levelcontrol=_decode_level_control(device),
        colorcontrol=_decode_color_control(device),
        battery=_child_int(device, "battery"),
        batterylow=_decode_battery_low(device),
        thermostat=_decode_thermostat(device),
        switch=_decode_switch(device),
        powermeter=_decode_power_meter(device),
        buttons=_decode_buttons(device),
    )


def parse_device_list(body: str) -> list[FritzDeviceInfo]:
    """Decode a getdevicelistinfos response into one record per device.

    Raises:
        FritzParseError: If the body is not a well-formed device list.

    """
    root = _parse_xml(body, "devicelist")
    devices = [_decode_device(device) for device in root.findall("device")]
    _LOGGER.debug("Decoded %d devices from device list", len(devices))
    return devices


def parse_color_defaults(body: str) -> FritzColorDefaults:
    """Decode a getcolordefaults response.

    Missing hsdefaults or temperaturedefaults sections produce empty tuples,
    since routers without color bulbs may omit them.

    Raises:
        FritzParseError: If the body is not a well-formed color defaults list.

    """
    root = _parse_xml(body, "colordefaults")

    colors = []
    for hs in root.findall("hsdefaults/hs"):
        name = _text(hs, "name")
        if name is None:
            error_msg = "Color preset without name"
            raise FritzParseError(error_msg)
        variants = tuple(
            FritzColor(
                sat_index=_attr_int(color, "sat_index"),
                hue=_attr_int(color, "hue"),
                sat=_attr_int(color, "sat"),
                val=_attr_int(color, "val"),
            )
            for color in hs.findall("color")
        )
        colors.append(FritzMainColor(name=name, colors=variants))

    color_temperatures = tuple(
        FritzColorTemperature(kelvin=_attr_int(temp, "value"))
        for temp in root.findall("temperaturedefaults/temp")
    )

    return FritzColorDefaults(
        colors=tuple(colors),
        color_temperatures=color_temperatures,
    )
