"""Tests for the FRITZ!Box AHA XML decoder."""

import pytest

from custom_components.fritz_smarthome.errors import FritzParseError
from custom_components.fritz_smarthome.models import (
    ColorControlState,
    FritzButton,
    HueSaturation,
)
from custom_components.fritz_smarthome.parser import (
    decode_features,
    normalize_ain,
    parse_color_defaults,
    parse_device_list,
    parse_session_info,
)

SWITCH_AIN = "099950756387"
PLUG_AIN = "087610000434"
BULB_AIN = "127010089238-1"
THERMOSTAT_AIN = "139790878454"
EXPECTED_DEVICE_COUNT = 4


def _single_device(body: str) -> str:
    return f"<devicelist version='1'>{body}</devicelist>"


class TestNormalizeAin:
    """Tests for normalize_ain function."""

    def test_normalize_ain_removes_inner_space(self) -> None:
        """Test that the space of a reported AIN is removed."""
        assert normalize_ain("09995 0756387") == SWITCH_AIN

    def test_normalize_ain_removes_all_whitespace(self) -> None:
        """Test that leading, trailing and repeated whitespace is removed."""
        assert normalize_ain(" 11630  0123456\n") == "116300123456"

    def test_normalize_ain_keeps_unit_suffix(self) -> None:
        """Test that the unit suffix of a HAN-FUN AIN is kept."""
        assert normalize_ain("12701 0089238-1") == BULB_AIN


class TestDecodeFeatures:
    """Tests for decode_features function."""

    def test_decode_features_for_dect_440(self) -> None:
        """Test that bits beyond the table are ignored for the DECT 440 mask."""
        assert decode_features(1048864) == frozenset({"Button", "TemperatureSensor"})

    def test_decode_features_for_color_bulb(self) -> None:
        """Test the feature set of a FRITZ!DECT 500 bulb."""
        assert decode_features(237572) == frozenset(
            {"Light", "HAN-FUN", "OnOffActor", "DimmableLight", "ColorLight"}
        )

    def test_decode_features_for_thermostat(self) -> None:
        """Test the feature set of a radiator thermostat."""
        assert decode_features(320) == frozenset({"Thermostat", "TemperatureSensor"})

    def test_decode_features_for_smart_plug(self) -> None:
        """Test the feature set of a FRITZ!DECT 200 plug."""
        assert decode_features(35712) == frozenset(
            {
                "EnergyMeter",
                "TemperatureSensor",
                "SmartPlug",
                "Microphone",
                "OnOffActor",
            }
        )

    def test_decode_features_returns_empty_set_for_zero(self) -> None:
        """Test that an empty mask has no features."""
        assert decode_features(0) == frozenset()

    def test_decode_features_skips_reserved_bits(self) -> None:
        """Test that reserved bit positions never produce a feature."""
        assert decode_features((1 << 1) | (1 << 3) | (1 << 12) | (1 << 14)) == (
            frozenset()
        )

    def test_decode_features_maps_both_han_fun_bits(self) -> None:
        """Test that bit 0 and bit 13 both decode to HAN-FUN."""
        assert decode_features(1) == frozenset({"HAN-FUN"})
        assert decode_features(1 << 13) == frozenset({"HAN-FUN"})


class TestParseSessionInfo:
    """Tests for parse_session_info function."""

    def test_parse_session_info_reads_all_fields(self) -> None:
        """Test that SID, challenge, block time and rights are decoded."""
        info = parse_session_info(
            "<SessionInfo><SID>ff88e4d39354992f</SID>"
            "<Challenge>a43ad5e9</Challenge><BlockTime>5</BlockTime>"
            "<Rights><Name>Dial</Name><Access>2</Access>"
            "<Name>HomeAuto</Name><Access>2</Access></Rights></SessionInfo>"
        )
        assert info.session_id == "ff88e4d39354992f"
        assert info.challenge == "a43ad5e9"
        assert info.block_time == 5
        assert info.rights == ("Dial", "HomeAuto")

    def test_parse_session_info_defaults_optional_fields(self) -> None:
        """Test that a bare SID yields empty challenge and rights."""
        info = parse_session_info("<SessionInfo><SID>0000000000000000</SID></SessionInfo>")
        assert info.challenge == ""
        assert info.block_time == 0
        assert info.rights == ()

    def test_parse_session_info_raises_without_sid(self) -> None:
        """Test that a session info without SID is rejected."""
        with pytest.raises(FritzParseError, match="SID"):
            parse_session_info("<SessionInfo><Challenge>x</Challenge></SessionInfo>")

    def test_parse_session_info_raises_on_wrong_root(self) -> None:
        """Test that a document with another root element is rejected."""
        with pytest.raises(FritzParseError, match="SessionInfo"):
            parse_session_info("<html><body>login</body></html>")


class TestParseDeviceList:
    """Tests for parse_device_list function."""

    def test_parse_device_list_decodes_every_device(
        self, device_list_xml: str
    ) -> None:
        """Test that one record is produced per device element."""
        devices = parse_device_list(device_list_xml)
        assert len(devices) == EXPECTED_DEVICE_COUNT
        assert [device.identifier for device in devices] == [
            SWITCH_AIN,
            PLUG_AIN,
            BULB_AIN,
            THERMOSTAT_AIN,
        ]

    def test_parse_device_list_is_idempotent(self, device_list_xml: str) -> None:
        """Test that decoding the same body twice gives equal records."""
        assert parse_device_list(device_list_xml) == parse_device_list(device_list_xml)

    def test_parse_device_list_decodes_dect_440(self, device_list_xml: str) -> None:
        """Test the identity, sensors and buttons of the FRITZ!DECT 440."""
        device = parse_device_list(device_list_xml)[0]
        assert device.name == "Schalter 1"
        assert device.product_name == "FRITZ!DECT 440"
        assert device.manufacturer == "AVM"
        assert device.firmware_version == "05.21"
        assert device.present is True
        assert device.battery == 100
        assert device.batterylow is False
        assert device.temperature is not None
        assert device.temperature.celsius == 22.5
        assert device.temperature.offset == 0
        assert str(device) == "Schalter 1 [099950756387] (FRITZ!DECT 440)"

    def test_parse_device_list_decodes_buttons(self, device_list_xml: str) -> None:
        """Test that all four buttons are decoded in document order."""
        device = parse_device_list(device_list_xml)[0]
        assert device.buttons == (
            FritzButton("5000", "Schalter 1: Top right", 1604710638),
            FritzButton("5001", "Schalter 1: Bottom right", 1602355181),
            FritzButton("5002", "Schalter 1: Bottom left", 1602355178),
            FritzButton("5003", "Schalter 1: Top left", 1604598916),
        )

    def test_parse_device_list_scales_power_meter(self, device_list_xml: str) -> None:
        """Test that voltage and power are scaled from mV and mW."""
        device = parse_device_list(device_list_xml)[1]
        assert device.powermeter is not None
        assert device.powermeter.power == 1.5
        assert device.powermeter.voltage == pytest.approx(230.051)
        assert device.powermeter.energy == 45
        assert device.switch is not None
        assert device.switch.state is True
        assert device.temperature is not None
        assert device.temperature.offset == -0.5

    def test_parse_device_list_decodes_hue_saturation_color(
        self, device_list_xml: str
    ) -> None:
        """Test that current_mode 1 yields a hue and saturation."""
        device = parse_device_list(device_list_xml)[2]
        assert device.colorcontrol == ColorControlState(
            color=HueSaturation(hue=358, sat=180)
        )
        assert device.levelcontrol is not None
        assert device.levelcontrol.levelpercentage == 50
        assert device.simpleonoff is not None
        assert device.simpleonoff.state is False

    def test_parse_device_list_decodes_color_temperature(self) -> None:
        """Test that current_mode 4 yields a color temperature."""
        devices = parse_device_list(
            _single_device(
                "<device identifier='1' functionbitmask='237572'>"
                "<colorcontrol current_mode='4'><hue></hue><saturation></saturation>"
                "<temperature>2700</temperature></colorcontrol></device>"
            )
        )
        assert devices[0].colorcontrol == ColorControlState(temperature=2700)

    def test_parse_device_list_ignores_color_without_mode(self) -> None:
        """Test that a color record without current_mode is absent."""
        devices = parse_device_list(
            _single_device(
                "<device identifier='1' functionbitmask='237572'>"
                "<colorcontrol current_mode=''><hue>1</hue></colorcontrol></device>"
            )
        )
        assert devices[0].colorcontrol is None

    def test_parse_device_list_scales_thermostat(self, device_list_xml: str) -> None:
        """Test that hkr values are decoded as half degrees."""
        device = parse_device_list(device_list_xml)[3]
        assert device.thermostat is not None
        assert device.thermostat.current_temperature == 22.0
        assert device.thermostat.target_temperature == 21.0

    def test_parse_device_list_leaves_unreported_records_absent(
        self, device_list_xml: str
    ) -> None:
        """Test that records a device does not report stay None."""
        plug = parse_device_list(device_list_xml)[1]
        assert plug.thermostat is None
        assert plug.colorcontrol is None
        assert plug.levelcontrol is None
        assert plug.battery is None
        assert plug.batterylow is None
        assert plug.buttons == ()

    def test_parse_device_list_treats_incomplete_record_as_absent(self) -> None:
        """Test that a record missing a nested value is None."""
        devices = parse_device_list(
            _single_device(
                "<device identifier='1' functionbitmask='35712'>"
                "<powermeter><voltage>1</voltage><power></power><energy>2</energy>"
                "</powermeter></device>"
            )
        )
        assert devices[0].powermeter is None

    def test_parse_device_list_reads_absent_device(self) -> None:
        """Test that present 0 marks the device as not present."""
        devices = parse_device_list(
            _single_device(
                "<device identifier='1' functionbitmask='320'>"
                "<present>0</present><name>Weg</name></device>"
            )
        )
        assert devices[0].present is False

    def test_parse_device_list_keeps_button_without_timestamp(self) -> None:
        """Test that an empty lastpressedtimestamp is decoded as None."""
        devices = parse_device_list(
            _single_device(
                "<device identifier='1' functionbitmask='32'>"
                "<button id='7'><name>B</name><lastpressedtimestamp/></button>"
                "</device>"
            )
        )
        assert devices[0].buttons == (FritzButton("7", "B", None),)

    def test_parse_device_list_returns_empty_list(self) -> None:
        """Test that a list without devices decodes to an empty list."""
        assert parse_device_list("<devicelist version='1'/>") == []

    def test_parse_device_list_raises_on_malformed_xml(self) -> None:
        """Test that malformed XML is rejected."""
        with pytest.raises(FritzParseError, match="Malformed"):
            parse_device_list("<devicelist><device>")

    def test_parse_device_list_raises_on_wrong_root(self) -> None:
        """Test that another document type is rejected."""
        with pytest.raises(FritzParseError, match="devicelist"):
            parse_device_list("<colordefaults/>")

    def test_parse_device_list_raises_without_identifier(self) -> None:
        """Test that a device without identifier is rejected."""
        with pytest.raises(FritzParseError, match="identifier"):
            parse_device_list(_single_device("<device functionbitmask='1'/>"))

    def test_parse_device_list_raises_on_invalid_bitmask(self) -> None:
        """Test that a non-numeric functionbitmask is rejected."""
        with pytest.raises(FritzParseError, match="functionbitmask"):
            parse_device_list(
                _single_device("<device identifier='1' functionbitmask='abc'/>")
            )

    def test_parse_device_list_raises_on_invalid_number(self) -> None:
        """Test that a non-numeric measurement is rejected."""
        with pytest.raises(FritzParseError, match="celsius"):
            parse_device_list(
                _single_device(
                    "<device identifier='1' functionbitmask='256'>"
                    "<temperature><celsius>warm</celsius><offset>0</offset>"
                    "</temperature></device>"
                )
            )


class TestParseColorDefaults:
    """Tests for parse_color_defaults function."""

    def test_parse_color_defaults_reads_presets(self, color_defaults_xml: str) -> None:
        """Test that preset groups and their variants are decoded."""
        defaults = parse_color_defaults(color_defaults_xml)
        assert [color.name for color in defaults.colors] == ["Rot", "Orange"]
        assert len(defaults.colors[0].colors) == 3
        assert defaults.colors[0].colors[1].sat == 112
        assert [temp.kelvin for temp in defaults.color_temperatures] == [
            2700,
            3000,
            4200,
            6500,
        ]

    def test_parse_color_defaults_allows_missing_sections(self) -> None:
        """Test that missing sections decode to empty tuples."""
        defaults = parse_color_defaults("<colordefaults/>")
        assert defaults.colors == ()
        assert defaults.color_temperatures == ()

    def test_find_preset_matches_any_variant(self, color_defaults_xml: str) -> None:
        """Test that every saturation variant maps back to its group."""
        defaults = parse_color_defaults(color_defaults_xml)
        preset = defaults.find_preset(358, 54)
        assert preset is not None
        assert preset.name == "Rot"

    def test_find_preset_requires_exact_match(self, color_defaults_xml: str) -> None:
        """Test that a near miss does not match any preset."""
        defaults = parse_color_defaults(color_defaults_xml)
        assert defaults.find_preset(358, 181) is None

    def test_get_preset_by_name(self, color_defaults_xml: str) -> None:
        """Test that presets can be looked up by name."""
        defaults = parse_color_defaults(color_defaults_xml)
        preset = defaults.get_preset("Orange")
        assert preset is not None
        assert preset.colors[0].hue == 35
        assert defaults.get_preset("Lila") is None
