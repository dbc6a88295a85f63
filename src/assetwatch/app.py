# src/assetwatch/app.py
"""
AssetWatch Application - Console Entry Point

This module wires the application together and runs the live rate display:
it configures logging, builds the rate provider and the shared rate cache,
and runs the periodic refresher, logging current rates and portfolio
valuations on every tick until interrupted.

Files that USE this module:
- assetwatch.__main__ (python -m assetwatch)
- pyproject.toml (assetwatch console script)

Files that this module USES:
- assetwatch.shared.logging_conf (setup_logging)
- assetwatch.config (settings)
- assetwatch.adapters.providers (FinanceApiProvider)
- assetwatch.adapters.persistence (JsonInvestmentStore)
- assetwatch.adapters.formatting (market_lines, investment_line, summary_line)
- assetwatch.application (RateCache, RateRefresher, PortfolioService)
"""
import asyncio
import logging
import os

from assetwatch.adapters.formatting.formatter import investment_line, market_lines, summary_line
from assetwatch.adapters.persistence.investment_store import JsonInvestmentStore
from assetwatch.adapters.providers.finance_api import FinanceApiProvider
from assetwatch.application.portfolio_service import PortfolioService
from assetwatch.application.rate_cache import RateCache
from assetwatch.application.refresher import RateRefresher
from assetwatch.domain.errors import RateSourceError
from assetwatch.domain.models import RateSnapshot
from assetwatch.shared.logging_conf import setup_logging

logger = logging.getLogger(__name__)


def build_service() -> PortfolioService:
    """
    Build the portfolio service with a shared rate cache.

    Returns:
        PortfolioService backed by the finance API and the JSON investment store
    """
    cache = RateCache(FinanceApiProvider())
    return PortfolioService(cache, store=JsonInvestmentStore())


def _report(service: PortfolioService, snapshot: RateSnapshot) -> None:
    """Log current rates and the valuation of every stored investment."""
    logger.info("\n%s", market_lines(snapshot))

    investments = service.list_investments()
    if not investments:
        return
    for inv in investments:
        logger.info("%s", investment_line(inv, service.get_profit_snapshot(inv)))
    logger.info("%s", summary_line(service.summarize(investments)))


async def _run(service: PortfolioService) -> None:
    def on_update(snapshot: RateSnapshot) -> None:
        _report(service, snapshot)

    def on_error(error: RateSourceError) -> None:
        logger.warning("Rates unavailable, keeping last display: %s", error)

    refresher = RateRefresher(service.cache, on_update=on_update, on_error=on_error)
    async with refresher:
        # Runs until cancelled (Ctrl+C)
        await asyncio.Event().wait()


def main() -> None:
    """
    Initialize and start the live rate display.

    This function:
    1. Sets up logging from settings
    2. Builds the provider, shared cache and portfolio service
    3. Runs the refresh loop until interrupted
    """
    from assetwatch.config import settings

    setup_logging(
        level=logging.INFO,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_to_stdout=settings.log_stdout,
    )
    logger.info("Working directory: %s", os.getcwd())
    logger.info(
        "Starting rate display… source=%s shape=%s cache=%d minutes, refresh=%d minutes",
        settings.rates_url,
        settings.rates_shape,
        settings.rate_cache_minutes,
        settings.refresh_interval_minutes,
    )

    service = build_service()
    try:
        asyncio.run(_run(service))
    except KeyboardInterrupt:
        logger.info("Stopped by user (KeyboardInterrupt)")


if __name__ == "__main__":
    main()
