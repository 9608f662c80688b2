"""
Constants for VBO/ECU Log Merging

This module defines channel names, file-format markers and algorithm defaults
used throughout the merge pipeline.
"""

VERSION = "1.1.0"

# Internal time channel derived by both readers (milliseconds)
TIME_MILLIS_HEADER = "TimeMillis"

# ECU log channels
ECU_TIME_HEADER = "Time(S)"
ECU_SPEED_HEADER = "Speed"
ECU_OIL_PRESS_HEADER = "OilPress"

# VBO file channels and sections
VBO_SPEED_HEADER = "velocity kmh"
VBO_SPEED_COLUMN_NAME = "velocity"
VBO_TIME_HEADER = "time"
VBO_LATITUDE_HEADER = "latitude"
VBO_LONGITUDE_HEADER = "longitude"
VBO_HEADER_SECTION = "[header]"
VBO_DATA_SECTION = "[data]"
VBO_COMMENTS_SECTION = "[comments]"
VBO_COLUMN_NAMES_SECTION = "[column names]"
VBO_MERGED_COMMENT = "Merged vbo with ecu logs"

# Merge settings
MERGED_ECU_HEADER_PREFIX = "ecu_"
MERGED_FILE_SUFFIX = "-ecu.vbo"

# Time normalization: speeds above this fraction of the session maximum
# belong to the top-speed region
LAST_LAP_MAX_SPEED_PERCENTAGE = 0.95

# Oil pressure smoothing
NUMBER_OF_SMOOTHING_CYCLES = 40

# Throttle analytics
THROTTLE_VOLT_HEADER = MERGED_ECU_HEADER_PREFIX + "VTA V"
THROTTLE_VOLT_MIN = 0.6
THROTTLE_VOLT_MAX = 4.0
THROTTLE_PERCENTAGE_HEADER = "calc_throttlePercentage"
LAP_ACCUMULATED_THROTTLE_PERCENTAGE_HEADER = "calc_lapAccumThrottlePercentage"

# Reference track coordinates are stored in arc-minutes
DEGREES_TO_MINUTES = 60.0
