# Settings for river generation

# Rivers shorter than this (in tiles, source and mouth included) are rejected.
DEFAULT_MIN_LENGTH = 8

# Upper bound on mountain sources tried per run.
DEFAULT_MAX_ATTEMPTS = 100

# Rivers requested per world when the caller does not say.
DEFAULT_TARGET_COUNT = 40

# Node expansions allowed for one primary search before it gives up.
PRIMARY_MAX_EXPANSIONS = 20_000

# Weight of the elevation gap to sea level in the primary search heuristic.
PRIMARY_ELEVATION_WEIGHT = 0.5

# Loop iterations (advances plus backtracks) allowed for one fallback walk.
FALLBACK_MAX_STEPS = 200

# Fallback candidate ranking weights.
FALLBACK_DROP_WEIGHT = 10
FALLBACK_COAST_PROGRESS_WEIGHT = 5
FALLBACK_COAST_BONUS = 100
FALLBACK_CROWDING_PENALTY = 10
FALLBACK_CROWDING_RADIUS = 2

# Tag mixed into the world seed for the source shuffle stream.
SOURCE_SHUFFLE_TAG = 7
