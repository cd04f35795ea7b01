"""
Meridian: a small HTTP backend serving two record collections,
projects and indicators, behind JWT authentication.

Every read and write goes through one visibility policy
(`meridian.app.domain.policy`) that decides, from the caller's token and
a record's `private` / `published` flags, what may be seen or changed.
"""

__all__ = [
    "CallerIdentity",
    "Capability",
]

from .app.domain.policy import CallerIdentity, Capability

__version__ = "0.1.0"
