# Board defaults used when callers do not pick their own dimensions.
DEFAULT_ROWS = 8
DEFAULT_COLS = 8

# Shortest horizontal/vertical run that counts as a match.
MIN_MATCH_LENGTH = 3

# Upper bound on clear/collapse/refill passes for a single move.
# A generator that keeps producing runs would otherwise never let the cascade settle.
MAX_CASCADE_DEPTH = 500
