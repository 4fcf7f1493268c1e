# Logged events / error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
DELETE_SUCCESS = 'DELETE_SUCCESS'
