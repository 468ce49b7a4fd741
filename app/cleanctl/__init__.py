"""cleanctl - Remove build artifacts and dependency directories from project trees."""

__version__ = "0.6.2"
