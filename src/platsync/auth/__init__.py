"""Derived credential exchange and caching for the data-plane API."""

from .credential_cache import CredentialCache
from .credential_exchanger import CredentialExchanger, ProjectCredentials

__all__ = ["CredentialCache", "CredentialExchanger", "ProjectCredentials"]
