"""
Golden Hour Tools Package.

Collaborators the physics engine relies on but does not own:

- timezone_lookup: coordinates to IANA timezone (timezonefinder)
"""

from .timezone_lookup import TimezoneResolver, load_timezone

__all__ = [
    "TimezoneResolver",
    "load_timezone",
]
