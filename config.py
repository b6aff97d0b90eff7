# Global configuration constants for the page replacement simulator

DEFAULT_REFERENCE_STRING = "7,0,1,2,0,3,0,4,2,3,0,3,2"
DEFAULT_FRAME_COUNT = 3
MIN_FRAME_COUNT = 1   # A frame count below this is rejected
MAX_FRAME_COUNT = 16  # Upper bound offered by the shells

RATIO_PRECISION = 3   # Decimal places for hit/fault ratios

EMPTY_SLOT_LABEL = "_"   # Shown for an empty frame
NO_EVICTION_LABEL = "-"  # Shown when a step replaced nothing

EVENT_LOG_TAIL = 20  # Events shown in the web event log

# Random reference string generator
RANDOM_LENGTH = 20
RANDOM_PAGE_RANGE = 8
RANDOM_LOCALITY = 0.6
