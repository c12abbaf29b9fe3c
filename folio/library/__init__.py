"""Identity resolution for books, versions, and chapters."""

from .resolver import IdentityResolver, next_version_name

__all__ = ["IdentityResolver", "next_version_name"]
