"""
CLI entrypoint for purging expired revocation entries from the SQL store. Run from cron, e.g.:

  STORAGE_BACKEND=sql DATABASE_URL=sqlite:///roster.db python -m roster.retention

The in-memory backend purges after each logout; there is nothing for this job to do there.
"""

import logging
import sys

from roster.core.config import get_settings
from roster.core.dependencies import get_revocation_registry
from roster.services.retention import run_revocation_purge

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run the purge once against the configured store."""
    settings = get_settings()
    if settings.STORAGE_BACKEND != "sql":
        logger.error("STORAGE_BACKEND is %r; the purge job needs the sql backend.", settings.STORAGE_BACKEND)
        return 1
    try:
        purged = run_revocation_purge(get_revocation_registry(), settings)
        logger.info("Revocation purge completed: entries_removed=%s", purged)
        return 0
    except Exception as e:
        logger.exception("Revocation purge failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
