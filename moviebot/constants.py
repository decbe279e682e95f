"""Application constants - centralized configuration values."""

# =============================================================================
# Recommendation pool
# =============================================================================
DEFAULT_RECOMMENDATION_COUNT = 3
POOL_LOW_WATER_MARK = 5  # Replenish when fewer eligible movies than this
POOL_HIGH_WATER_MARK = 10  # Stop fetching pages once this many are eligible
POOL_MAX_PAGES = 5  # Max catalog pages fetched per recommend call

# =============================================================================
# Catalog discovery
# =============================================================================
DISCOVER_SORT_BY = "vote_average.desc"
DISCOVER_MIN_VOTE_COUNT = 500

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
HTTPX_TIMEOUT = 10.0

# =============================================================================
# External API URLs
# =============================================================================
TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
TMDB_POSTER_SIZE = "w500"

# =============================================================================
# Persistence
# =============================================================================
JSON_INDENT = 2
