"""Data models — Field descriptors, filter criteria, pages and movie records."""
