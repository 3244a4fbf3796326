"""Scheduling and statistics configuration constants.

These cover the driving loop (tick pacing, batching) and the history
sampler. The engine itself never reads the scheduling values; they are
policy for whoever calls ``step()``.
"""

# =============================================================================
# DRIVING LOOP
# =============================================================================

DEFAULT_TICK_RATE_MS = 100  # Wall-clock milliseconds between external ticks
DEFAULT_SPEED_MULTIPLIER = 1  # Engine steps per external tick
MAX_SPEED_MULTIPLIER = 50
DEFAULT_TICK_LIMIT = 1000

# Upper bound on engine steps per driver advance, so a stalled host does not
# try to catch up on minutes of backlog in one call
MAX_CATCH_UP_TICKS = 5

# =============================================================================
# HISTORY SAMPLING
# =============================================================================

DEFAULT_RECORDING_FREQUENCY = 10  # Record a history point every N ticks
MIN_HISTORY_CAPACITY = 100  # Smallest history buffer ever allocated
UNBOUNDED_HISTORY_CAPACITY = 1000  # Capacity when no tick limit is enabled

# =============================================================================
# LOGGING
# =============================================================================

STATUS_LOG_INTERVAL_SECONDS = 5.0  # Runner status line cadence
