"""Base adapter interface — Abstract classes for search engine connectors."""

from cinesift.adapters.base.adapter import AdapterHealth, Hit, SearchAdapter, SearchResult
from cinesift.adapters.base.registry import AdapterRegistry

__all__ = ["AdapterHealth", "AdapterRegistry", "Hit", "SearchAdapter", "SearchResult"]
