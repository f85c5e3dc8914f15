from .lookup import DataBagDirectoryLookup, MappingLookup, SecretLookup
from .token import resolve_token

__all__ = ["DataBagDirectoryLookup", "MappingLookup", "SecretLookup", "resolve_token"]
