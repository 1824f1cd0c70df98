import argparse
from typing import Optional

from loguru import logger

from src.config import get_settings
from src.db.catalog_store import CatalogStore
from src.scheduler.jobs import MonitorCycle
from src.trackers.strategies import TRACKERS

settings = get_settings()


def run_check(strategy: Optional[str] = None):
    """執行單次監控週期"""
    report = MonitorCycle(settings).run(strategy)
    if report is None:
        logger.error("Monitor cycle did not complete")
        return
    logger.info(f"Result: {report}")


def show_catalog():
    catalog = CatalogStore(settings.store_path).load()
    if not catalog:
        logger.info(f"No products stored in {settings.store_path}")
        return
    for product in catalog.values():
        stock = "in stock" if product.in_stock else "out of stock"
        logger.info(
            f"[{product.category}] {product.name}: "
            f"{settings.currency_symbol}{product.price} ({stock}) {product.url}"
        )
    logger.info(f"{len(catalog)} products in {settings.store_path}")


def serve():
    import uvicorn

    logger.info(f"HTTP server listening on port {settings.port}")
    uvicorn.run("src.main:app", host=settings.host, port=settings.port)


def main():
    parser = argparse.ArgumentParser(description="Retail listing price monitor")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # serve command
    subparsers.add_parser("serve", help="Start monitor and liveness server")

    # check command
    check_parser = subparsers.add_parser("check", help="Run one monitor cycle")
    check_parser.add_argument(
        "--strategy", "-s", choices=sorted(TRACKERS), help="Matching strategy"
    )

    # catalog command
    subparsers.add_parser("catalog", help="List stored products")

    args = parser.parse_args()

    if args.command == "check":
        run_check(args.strategy)
    elif args.command == "catalog":
        show_catalog()
    else:
        serve()


if __name__ == "__main__":
    main()
