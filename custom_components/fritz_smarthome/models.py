"""Data models for the FRITZ!Box Smart Home integration."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FritzSessionInfo:
    """Decoded body of a login_sid.lua response."""

    session_id: str
    challenge: str
    block_time: int = 0
    rights: tuple[str, ...] = ()


@dataclass(frozen=True)
class FritzSession:
    """An authenticated session against the router's login endpoint."""

    host: str
    session_id: str
    rights: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SimpleOnOffState:
    state: bool


@dataclass(frozen=True, slots=True)
class TemperatureState:
    celsius: float
    offset: float


@dataclass(frozen=True, slots=True)
class LevelControlState:
    level: int
    levelpercentage: int


@dataclass(frozen=True, slots=True)
class HueSaturation:
    hue: int
    sat: int


@dataclass(frozen=True, slots=True)
class ColorControlState:
    """Current bulb color; exactly one of the two fields is set."""

    color: HueSaturation | None = None
    temperature: int | None = None


@dataclass(frozen=True, slots=True)
class ThermostatState:
    current_temperature: float
    target_temperature: float


@dataclass(frozen=True, slots=True)
class SwitchState:
    state: bool


@dataclass(frozen=True, slots=True)
class PowerMeterState:
    """Power meter readings in V, W and Wh."""

    voltage: float
    power: float
    energy: int


@dataclass(frozen=True, slots=True)
class FritzButton:
    """A single sub-button of a multi-button device such as the FRITZ!DECT 440."""

    id: str
    name: str
    last_pressed_timestamp: int | None


@dataclass(frozen=True)
class FritzDeviceInfo:
    """Normalized state of one device from a single getdevicelistinfos poll.

    Optional sub-records are None when the router did not report them.
    """

    identifier: str
    product_name: str
    name: str
    features: frozenset[str]
    manufacturer: str = ""
    firmware_version: str = ""
    present: bool = True
    simpleonoff: SimpleOnOffState | None = None
    temperature: TemperatureState | None = None
    levelcontrol: LevelControlState | None = None
    colorcontrol: ColorControlState | None = None
    battery: int | None = None
    batterylow: bool | None = None
    thermostat: ThermostatState | None = None
    switch: SwitchState | None = None
    powermeter: PowerMeterState | None = None
    buttons: tuple[FritzButton, ...] = field(default_factory=tuple)

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    def __str__(self) -> str:
        return f"{self.name} [{self.identifier}] ({self.product_name})"


@dataclass(frozen=True, slots=True)
class FritzColor:
    sat_index: int
    hue: int
    sat: int
    val: int


@dataclass(frozen=True, slots=True)
class FritzMainColor:
    """A named preset group with its saturation variants."""

    name: str
    colors: tuple[FritzColor, ...]


@dataclass(frozen=True, slots=True)
class FritzColorTemperature:
    kelvin: int


@dataclass(frozen=True)
class FritzColorDefaults:
    """Color presets supported by the router's color bulbs."""

    colors: tuple[FritzMainColor, ...] = ()
    color_temperatures: tuple[FritzColorTemperature, ...] = ()

    def find_preset(self, hue: int, sat: int) -> FritzMainColor | None:
        """Return the preset group containing exactly this hue and saturation."""
        for main_color in self.colors:
            for color in main_color.colors:
                if color.hue == hue and color.sat == sat:
                    return main_color
        return None

    def get_preset(self, name: str) -> FritzMainColor | None:
        for main_color in self.colors:
            if main_color.name == name:
                return main_color
        return None
