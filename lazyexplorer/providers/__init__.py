"""Listing and status providers plus backend capability selection.

The explorer core only talks to the protocols in ``types``. Concrete adapters:
- ``LocalListingProvider`` for the real filesystem
- ``GitStatusProvider`` for the ``git`` command line
- fixture providers for explicitly requested demo data
"""

from __future__ import annotations

from ..errors import BackendUnavailableError
from .fixtures import DEMO_ROOT, FixtureListingProvider, FixtureStatusProvider
from .git import GitStatusProvider
from .local import LocalListingProvider
from .types import (
    BackendCapability,
    Connected,
    ListingProvider,
    Node,
    StatusProvider,
    Unavailable,
    detect_backend,
)


def select_listing_provider(
    capability: BackendCapability,
    *,
    demo: bool = False,
    show_hidden: bool = False,
) -> ListingProvider:
    """Pick the listing adapter for ``capability``.

    Demo data is returned only when ``demo`` is requested. An unavailable
    backend without ``demo`` raises ``BackendUnavailableError``.
    """
    if demo:
        return FixtureListingProvider()
    if isinstance(capability, Unavailable):
        raise BackendUnavailableError(capability.reason)
    return LocalListingProvider(show_hidden=show_hidden)


__all__ = [
    "BackendCapability",
    "Connected",
    "DEMO_ROOT",
    "FixtureListingProvider",
    "FixtureStatusProvider",
    "GitStatusProvider",
    "ListingProvider",
    "LocalListingProvider",
    "Node",
    "StatusProvider",
    "Unavailable",
    "detect_backend",
    "select_listing_provider",
]
