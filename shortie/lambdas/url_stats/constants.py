# Logged events / error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
STATS_SUCCESS = 'STATS_SUCCESS'
