"""
Gateway caching package.

Holds the employee listing cache. Entries are short-lived and explicitly
invalidated on every write.
"""

from .listing_cache import CacheEntry, EmployeeListingCache

__all__ = ["CacheEntry", "EmployeeListingCache"]
