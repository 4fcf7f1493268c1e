# Logged events / error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_EXPIRATION = 'INVALID_EXPIRATION'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
