from datetime import timedelta

from config.env import env

# The registry only verifies access tokens; issuing them is the identity provider's job.
NINJA_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=env.int("JWT_ACCESS_MINUTES", default=30)),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
    "UPDATE_LAST_LOGIN": False,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "ALGORITHM": "HS256",
    "JTI_CLAIM": "jti",
    "USER_ID_CLAIM": "user_id",
}
