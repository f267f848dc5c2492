"""Revocation retention: drop revocation entries for tokens that have expired anyway."""

import logging
from typing import TYPE_CHECKING

from roster.services.revocation import RevocationRegistry

if TYPE_CHECKING:
    from roster.core.config import Settings

logger = logging.getLogger(__name__)


def run_revocation_purge(registry: RevocationRegistry, settings: "Settings") -> int:
    """
    Purge expired revocation entries. Returns how many were removed.

    Idempotent: safe to run repeatedly.
    """
    if not settings.REVOCATION_PURGE_ENABLED:
        logger.debug("Revocation purge is disabled (REVOCATION_PURGE_ENABLED=false); skipping.")
        return 0
    return registry.purge_expired()
