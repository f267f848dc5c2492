"""Revocation registry: tokens invalidated before their natural expiry."""

import logging
import time
from collections.abc import Callable

from roster.storage.base import RevokedTokenRepository

logger = logging.getLogger(__name__)


class RevocationRegistry:
    """Deduplicated set of revoked token strings."""

    def __init__(
        self,
        repository: RevokedTokenRepository,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def revoke(self, token: str, expires_at: int | None = None) -> None:
        """
        Mark token as revoked. Idempotent.

        expires_at is the token's own exp claim; entries without it are never purged.
        """
        self._repository.add(token, expires_at)

    def is_revoked(self, token: str) -> bool:
        return self._repository.contains(token)

    def purge_expired(self) -> int:
        """
        Drop entries whose token has expired on its own.

        A purged token still fails verification as expired, so it stays unusable.
        """
        purged = self._repository.delete_expired(int(self._clock()))
        if purged > 0:
            logger.info("Revocation purge: entries_removed=%s", purged)
        return purged
