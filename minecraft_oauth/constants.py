"""
Endpoints and fixed protocol values for the Microsoft -> Xbox Live -> Minecraft chain
"""

# Microsoft identity platform (consumers tenant)
AUTHORIZE_URL = "https://login.microsoftonline.com/consumers/oauth2/v2.0/authorize"
TOKEN_URL = "https://login.microsoftonline.com/consumers/oauth2/v2.0/token"
NATIVE_CLIENT_REDIRECT_URI = "https://login.microsoftonline.com/common/oauth2/nativeclient"
SCOPE = "XboxLive.signin offline_access"

# Xbox Live user authentication
XBOX_LIVE_AUTH_URL = "https://user.auth.xboxlive.com/user/authenticate"
XBOX_LIVE_SITE_NAME = "user.auth.xboxlive.com"
XBOX_LIVE_RELYING_PARTY = "http://auth.xboxlive.com"

# Xbox Secure Token Service
XSTS_AUTH_URL = "https://xsts.auth.xboxlive.com/xsts/authorize"
XSTS_SANDBOX_ID = "RETAIL"
MINECRAFT_RELYING_PARTY = "rp://api.minecraftservices.com/"

# Minecraft services
MINECRAFT_LOGIN_URL = "https://api.minecraftservices.com/authentication/login_with_xbox"
MINECRAFT_PROFILE_URL = "https://api.minecraftservices.com/minecraft/profile"
MINECRAFT_ENTITLEMENTS_URL = "https://api.minecraftservices.com/entitlements/mcstore"
MINECRAFT_PRODUCT_NAME = "game_minecraft"

ACCOUNT_TYPE = "microsoft"

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}
