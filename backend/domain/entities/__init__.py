"""
Domain Entities

Entities are business objects with identity and lifecycle.

- IdentityContext: the authenticated caller, as resolved by the access control gate
"""

from .identity import IdentityContext

__all__ = ["IdentityContext"]
