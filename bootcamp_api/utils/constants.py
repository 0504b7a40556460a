"""Common constants."""

# Online delivery media
DEFAULT_ELECTRONIC_MEDIUM = "zoom"

# Photos
DEFAULT_PHOTO = "default.jpg"

# Review ratings
MIN_RATING = 1
MAX_RATING = 5
