"""Constants for the FRITZ!Box Smart Home integration.

This module contains all the constants used throughout the integration,
including router endpoints, configuration keys and the AHA feature table.
"""

DOMAIN = "fritz_smarthome"
MANUFACTURER = "AVM"

LOGIN_PATH = "/login_sid.lua"
HOMEAUTO_PATH = "//webservices/homeautoswitch.lua"

DEFAULT_HOST = "http://fritz.box"
DEFAULT_POLL_INTERVAL = 10
DEFAULT_DEBUG = False
REQUEST_TIMEOUT = 10.0

CONF_POLL_INTERVAL = "poll_interval"
CONF_DEBUG = "debug"

ERROR_INVALID_AUTH = "invalid_auth"
ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_TIMEOUT = "timeout_error"
ERROR_API_ERROR = "api_error"
ERROR_UNKNOWN = "unknown_error"

# Returned by the router instead of a session id when the login is rejected.
INVALID_SESSION_ID = "0000000000000000"
RIGHT_HOMEAUTO = "HomeAuto"

# Bit i of the functionbitmask maps to FEATURES[i].
FEATURE_RESERVED = "Reserved"
FEATURES = (
    "HAN-FUN",
    FEATURE_RESERVED,
    "Light",
    FEATURE_RESERVED,
    "AlarmSensor",
    "Button",
    "Thermostat",
    "EnergyMeter",
    "TemperatureSensor",
    "SmartPlug",
    "DECTRepeater",
    "Microphone",
    FEATURE_RESERVED,
    "HAN-FUN",
    FEATURE_RESERVED,
    "OnOffActor",
    "DimmableLight",
    "ColorLight",
)

FEATURE_LIGHT = "Light"
FEATURE_BUTTON = "Button"
FEATURE_THERMOSTAT = "Thermostat"
FEATURE_ENERGY_METER = "EnergyMeter"
FEATURE_TEMPERATURE_SENSOR = "TemperatureSensor"
FEATURE_SMART_PLUG = "SmartPlug"
FEATURE_ON_OFF_ACTOR = "OnOffActor"
FEATURE_DIMMABLE_LIGHT = "DimmableLight"
FEATURE_COLOR_LIGHT = "ColorLight"

COLOR_MODE_HUE_SAT = 1
COLOR_MODE_COLOR_TEMPERATURE = 4

# sethkrtsoll takes half-degree steps; these two raw values are switches.
THERMOSTAT_RAW_OFF = 253
THERMOSTAT_RAW_ON = 254
THERMOSTAT_MIN_TEMP = 8.0
THERMOSTAT_MAX_TEMP = 28.0
THERMOSTAT_STEP = 0.5

EVENT_BUTTON_PRESS = "press"
ATTR_BUTTON_ID = "button_id"
