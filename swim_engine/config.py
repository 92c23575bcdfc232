"""Configuration constants for the swim condition engine."""

# Absolute safety limits (applied regardless of user thresholds)
ABSOLUTE_MIN_TEMP = 5.0  # °C
ABSOLUTE_MAX_WAVE = 2.0  # meters
ABSOLUTE_MAX_WIND = 50.0  # km/h

# Perfect zones
PERFECT_TEMP_MIN = 22.0
PERFECT_TEMP_MAX = 25.0
PERFECT_WAVE_MAX = 0.2
PERFECT_WIND_MAX = 10.0

# Floors for the three-tier degradation curves
WITHIN_THRESHOLD_FLOOR = 0.6
BEYOND_THRESHOLD_FLOOR = 0.1
BEYOND_THRESHOLD_SCALE = 0.5
TEMP_DECAY_PER_DEGREE = 0.05

# Gust penalties
GUST_OVER_LIMIT_FACTOR = 0.7
GUSTY_FACTOR = 0.85
GUST_RATIO = 1.5

# Wind direction heuristic: "from" directions treated as onshore
ONSHORE_MIN_DEG = 180.0
ONSHORE_MAX_DEG = 360.0
ONSHORE_DIRECTION_SCORE = 0.5

# Warning thresholds
COLD_WATER_SHOCK_TEMP = 15.0
NEAR_LIMIT_RATIO = 0.8
HIGH_UV_INDEX = 6.0
ONSHORE_WARNING_MIN_SPEED = 10.0

# Rating cutoffs (lower bounds)
RATING_EXCELLENT = 80.0
RATING_GOOD = 60.0
RATING_FAIR = 40.0
RATING_POOR = 20.0

# Optimal window search
MIN_WINDOW_SCORE = 60.0
DEFAULT_WINDOW_HOURS = 2

# Tide estimation
TIDE_WINDOW_HALF_WIDTH = 12  # samples each side (hours for hourly data)
TIDE_EXTREMA_THRESHOLD = 0.05  # fraction of detrended range
SEA_LEVEL_HIGH = 0.5  # meters, sign-heuristic fallback
SEA_LEVEL_LOW = -0.5

# Fallback values for missing provider fields
FALLBACK_NUMERIC = 0.0
FALLBACK_AIR_TEMPERATURE = 20.0
FALLBACK_WEATHER_CODE = 0

# Daylight (0 = geometric sunrise/sunset, 6 = civil twilight)
DAYLIGHT_DEPRESSION_ANGLE = 0.0

# Cached report lifetime (minutes)
CACHE_EXPIRY_MINUTES = 60
CACHE_STALE_MINUTES = 30

# Timestamp format exchanged with the provider
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"
