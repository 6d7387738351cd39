"""Configuration constants for the limits plugin."""

import os

# Credentials store
DEFAULT_AUTH_PATH = os.path.expanduser("~/.pi/agent/auth.json")
GEMINI_AUTH_KEY = "google-gemini-cli"
COPILOT_AUTH_KEY = "github-copilot"

# Gemini settings
GEMINI_LOAD_CODE_ASSIST_ENDPOINT = "https://cloudcode-pa.googleapis.com/v1internal:loadCodeAssist"
GEMINI_QUOTA_ENDPOINT = "https://cloudcode-pa.googleapis.com/v1internal:retrieveUserQuota"
LOAD_CODE_ASSIST_METADATA = {
    "ideType": "IDE_UNSPECIFIED",
    "platform": "PLATFORM_UNSPECIFIED",
    "pluginType": "GEMINI",
}

# Copilot settings
COPILOT_USER_ENDPOINT = "https://api.github.com/copilot_internal/user"

# Host UI
WIDGET_KEY = "limits"
WIDGET_PLACEMENT = "belowEditor"
CLEAR_DELAY_SECONDS = 10.0

# Common settings
DEFAULT_TIMEOUT = 8.0
