"""Constants for the Rachio Smart Hose Timer integration."""

DOMAIN = "rachio_hose_timer"

# Configuration
CONF_API_KEY = "api_key"
CONF_DURATION = "duration"
DEFAULT_NAME = "Rachio"

# Watering runtime in seconds, enforced by the valve itself
DEFAULT_DURATION = 1800
MIN_DURATION = 60
MAX_DURATION = 86400

# API base URLs
API_BASE_URL = "https://api.rach.io/1/public"
CLOUD_BASE_URL = "https://cloud-rest.rach.io"

# Person API Endpoints
PERSON_INFO_ENDPOINT = "person/info"

# Smart Hose Timer API Endpoints
VALVE_LIST_BASE_STATIONS_ENDPOINT = "/valve/listBaseStations/{userId}"
VALVE_LIST_VALVES_ENDPOINT = "/valve/listValves/{baseStationId}"
VALVE_START = "valve/startWatering"
VALVE_STOP = "valve/stopWatering"

# Rate limit headers
HEADER_RATE_LIMIT = "X-RateLimit-Limit"
HEADER_RATE_REMAINING = "X-RateLimit-Remaining"
HEADER_RATE_RESET = "X-RateLimit-Reset"

# Device Types
DEVICE_TYPE_IRRIGATION_VALVE = "irrigation_valve"
MANUFACTURER = "Rachio"
MODEL_SMART_HOSE_TIMER = "Smart Hose Timer"

# Services
SERVICE_START_WATERING = "start_watering"
