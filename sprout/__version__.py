"""Version information for sprout."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sprout")
except PackageNotFoundError:
    # Running from a source checkout without an installed distribution
    __version__ = "0.0.0+unknown"

# Filled in by release builds
COMMIT = "none"
BUILD_DATE = "unknown"
