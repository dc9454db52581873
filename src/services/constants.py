"""
Constants for cycle analysis.

These values model a textbook cycle and are used wherever the analyzer
needs a fixed assumption rather than something derived from the user's data.
"""

# Fallback period length used only by phase classification
DEFAULT_PERIOD_DURATION = 5

# Ovulation is assumed to happen this many days before the next period
LUTEAL_PHASE_DAYS = 14

# Ovulatory band as [start, end) cycle days, independent of cycle length
OVULATORY_WINDOW_START = 14
OVULATORY_WINDOW_END = 16

# Maximum gap (in days between consecutive flow days) inside one episode
EPISODE_MAX_GAP_DAYS = 1

MAX_COMMON_SYMPTOMS = 5

# Accepted range for a manually entered average cycle length
MIN_MANUAL_CYCLE_LENGTH = 21
MAX_MANUAL_CYCLE_LENGTH = 35

PREDICTION_SOURCE_MANUAL = "manual"
PREDICTION_SOURCE_COMPUTED = "computed"
