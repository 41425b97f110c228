# config.py
"""
Library configuration constants for undonete
"""

# Logging
LOGGER_NAME = "undonete"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUP_COUNT = 5

# History settings
DEFAULT_HISTORY_LIMIT = None  # None keeps every effectful command
