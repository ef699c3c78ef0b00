"""CineSift — Filter-to-query compiler and paginated search pipeline for RediSearch movie indexes."""

__version__ = "0.1.0"
