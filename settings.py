from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "info")

# Azure application registration (user configurable)
# The client id is required; the provider refuses to start without one.
MS_CLIENT_ID = config.get("MS_CLIENT_ID", "")
# Microsoft's recommended redirect URI for native clients
MS_REDIRECT_URI = config.get(
    "MS_REDIRECT_URI",
    "https://login.microsoftonline.com/common/oauth2/nativeclient",
)

# Timeout for the default HTTP client (seconds). Injected clients keep their own policy.
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)
