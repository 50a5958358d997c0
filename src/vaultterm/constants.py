"""Centralized constants for vaultterm."""

APP_NAME = "vaultterm"
HOST_NAME = "vaultterm"

# Files and paths
USER_DATA_DIR = f"~/.{APP_NAME}"
DEFAULT_PROFILE_PATH = f"{USER_DATA_DIR}/profile.json"
DEFAULT_DATA_FILENAME = "vault.json"
DEFAULT_LOGS_DIRNAME = "logs"
LOG_FILE_EXTENSION = ".log"
DATETIME_FORMAT_FILENAME = "%Y-%m-%d_%H-%M-%S"

# Timing
ACTION_DELAY_SECONDS = 0.5
QUICK_FEEDBACK_SECONDS = 3.0

# Display
RECENT_ACTIVITY_LIMIT = 5
MASKED_SECRET = "••••••••••"
WELCOME_MESSAGE = 'Welcome to vaultterm. Type "help" to get started.'
