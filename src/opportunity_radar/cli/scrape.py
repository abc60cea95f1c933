"""Run one ingestion pass against the configured database, then exit.

Usage:
  opportunity-radar-scrape            # skip when the store already has data
  opportunity-radar-scrape --force    # always run a pass
"""
import argparse
import asyncio
import logging
import sys

from opportunity_radar.config import get_settings
from opportunity_radar.container import Container, init_container
from opportunity_radar.logging_config import configure_logging
from opportunity_radar.services.ingestion import PassResult

logger = logging.getLogger(__name__)


async def run_once(container: Container, force: bool = False) -> PassResult | None:
    """Run a single pass unless the store is already seeded; None when skipped."""
    store = container.store()
    existing = store.count_active()
    if existing and not force:
        logger.info("Store already has %d active opportunities; skipping scrape", existing)
        return None

    pipeline = container.pipeline()
    await pipeline.prepare()
    try:
        return await pipeline.run_pass()
    finally:
        await pipeline.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run one ingestion pass over every configured source.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Run even when the store already has active opportunities",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)
    container = init_container(settings)
    try:
        result = asyncio.run(run_once(container, force=args.force))
    except KeyboardInterrupt:
        print("\nStopped by user", file=sys.stderr)
        return 130
    except Exception:  # pylint: disable=broad-except
        logger.exception("Error running scraper")
        return 1
    finally:
        container.engine().dispose()

    if result is not None:
        print(f"Stored {result.stored} opportunities ({result.created} new, {result.updated} refreshed)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
