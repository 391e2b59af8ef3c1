import os

API_TITLE = os.environ.get("PUNCH_API_TITLE", "Punch Metrics API")
LOG_LEVEL = os.environ.get("PUNCH_LOG_LEVEL", "INFO")

# Zone used when a schedule does not carry one
DEFAULT_TIMEZONE = os.environ.get("PUNCH_DEFAULT_TIMEZONE", "UTC")

# Night differential window, local clock hours [start, end)
NIGHT_DIFF_START_HOUR = int(os.environ.get("PUNCH_NIGHT_START_HOUR", "22"))
NIGHT_DIFF_END_HOUR = int(os.environ.get("PUNCH_NIGHT_END_HOUR", "6"))
