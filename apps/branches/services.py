"""Branch domain services."""

from __future__ import annotations

import logging

from .models import Branch

logger = logging.getLogger(__name__)


class BranchInUseError(Exception):
    """Raised when a branch still owns listings."""


def delete_branch(branch: Branch) -> None:
    listing_count = branch.listings.count()
    if listing_count:
        logger.warning("Refusing to delete branch %s with %s listings", branch.pk, listing_count)
        raise BranchInUseError("Branch has listings. Remove listings first.")
    branch.delete()
