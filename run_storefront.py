#!/usr/bin/env python3
"""
Lesson Storefront command-line client.

Browses the lesson catalog, fills a cart and submits an order against
the catalog service configured by STOREFRONT_API_URL.

Usage:
    python run_storefront.py [--search TERM] [--sort KEY] [--filter STOCK]
                             [--add LESSON_ID ...] [--submit --name ... ]

Examples:
    # List available lessons in London, cheapest first
    python run_storefront.py --filter available --location London --sort price-asc

    # Put two spaces of a lesson in the cart and preview the order
    python run_storefront.py --add 64f1c0ffee --add 64f1c0ffee \\
        --submit --dry-run --name "John Smith" --phone "+1 555-1234" \\
        --address "1 Main St"

    # Export the displayed catalog and the order receipt
    python run_storefront.py --add 64f1c0ffee --submit --name "John Smith" \\
        --phone "+1 555-1234" --address "1 Main St" --export-dir output/exports
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List

import pandas as pd

from lessonshop.gateway import HttpCatalogGateway, TransportFailure
from lessonshop.models.lesson import Lesson
from lessonshop.models.order import CustomerForm
from lessonshop.resilience.circuit_breaker import CircuitBreaker
from lessonshop.storefront import Storefront
from lessonshop.utils.config import config
from lessonshop.utils.file_utils import generate_filename, save_csv, save_json
from lessonshop.utils.logger import setup_logger
from lessonshop.validation.customer_validator import CustomerValidator


CATALOG_COLUMNS = ["id", "subject", "location", "price", "spaces"]


def parse_arguments():
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Browse lessons, fill a cart and submit an order",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument("--search", default="", help="Search term sent to the catalog service")
    parser.add_argument(
        "--sort",
        default="subject-asc",
        help="Sort key <field>-<asc|desc> (default: subject-asc)"
    )
    parser.add_argument(
        "--filter",
        choices=["all", "available", "soldout"],
        default="all",
        help="Stock filter (default: all)"
    )
    parser.add_argument("--min-price", type=float, default=0, help="Lowest price shown")
    parser.add_argument("--max-price", type=float, help="Highest price shown")
    parser.add_argument("--location", default="", help="Only show lessons at this location")

    parser.add_argument(
        "--add",
        action="append",
        default=[],
        metavar="LESSON_ID",
        help="Add one space of a lesson to the cart (repeatable)"
    )

    parser.add_argument("--submit", action="store_true", help="Submit the cart as an order")
    parser.add_argument("--name", default="", help="Customer name")
    parser.add_argument("--phone", default="", help="Customer phone")
    parser.add_argument("--email", default="", help="Customer e-mail")
    parser.add_argument("--address", default="", help="Customer address")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the order instead of submitting it"
    )

    parser.add_argument("--export-dir", type=Path, help="Write catalog CSV and order JSON here")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    return parser.parse_args()


def display_catalog(lessons: List[Lesson], locations: List[str]):
    """Print the displayed lessons as a table."""
    print("\n" + "=" * 60)
    print("CATALOG")
    print("=" * 60)

    if not lessons:
        print("No lessons match the current filters.")
    else:
        df = pd.DataFrame(lessons, columns=CATALOG_COLUMNS)
        print(df.to_string(index=False))

    if locations:
        print(f"\nLocations: {', '.join(locations)}")


def display_cart(shop: Storefront):
    """Print the cart summary and total."""
    print("\n" + "=" * 60)
    print(f"CART ({shop.cart_count} item(s))")
    print("=" * 60)

    for entry in shop.cart_summary:
        more = "" if entry.can_increase else "  (no spaces left)"
        print(
            f"{entry.subject:20s} | {entry.location:15s} | "
            f"{entry.qty:2d} x {entry.price} = {entry.line_total}{more}"
        )

    print("-" * 60)
    print(f"Total: {shop.cart_total}")


async def run(args) -> int:
    """Drive one storefront session from the parsed arguments."""
    logger = logging.getLogger("lessonshop")

    breaker = CircuitBreaker(
        failure_threshold=config.breaker_threshold,
        timeout=config.breaker_timeout,
        expected_exception=TransportFailure
    )

    async with HttpCatalogGateway(
        config.api_url,
        timeout=config.http_timeout,
        circuit_breaker=breaker
    ) as gateway:
        shop = Storefront(gateway, default_max_price=config.default_max_price)

        # Step 1: Load catalog
        shop.filters.search_term = args.search
        print(f"\n[1/3] Loading lessons from {config.api_url}...")
        if not await shop.search():
            print(f"ERROR: {shop.error}")
            return 1

        shop.filters.sort_key = args.sort
        shop.filters.filter_key = args.filter
        shop.filters.min_price = args.min_price
        if args.max_price is not None:
            shop.filters.max_price = args.max_price
        shop.filters.location_filter = args.location

        displayed = shop.displayed_lessons
        display_catalog(displayed, shop.location_options)

        if args.export_dir:
            csv_path = args.export_dir / generate_filename("catalog", "csv")
            if save_csv(pd.DataFrame(displayed, columns=CATALOG_COLUMNS), csv_path):
                print(f"\nCatalog saved to: {csv_path}")

        if not args.add:
            return 0

        # Step 2: Fill cart
        print(f"\n[2/3] Adding {len(args.add)} item(s) to the cart...")
        for lesson_id in args.add:
            lesson = shop.find_lesson(lesson_id)
            if lesson is None:
                print(f"  ✗ Unknown lesson: {lesson_id}")
                continue
            if not shop.can_add(lesson):
                print(f"  ✗ Sold out: {lesson['subject']}")
                continue

            await shop.add_to_cart(lesson)
            print(f"  ✓ {lesson['subject']} (in cart: {shop.cart_quantity(lesson)})")

        if shop.error:
            print(f"WARNING: {shop.error}")

        display_cart(shop)

        if args.export_dir and shop.cart_summary:
            cart_path = args.export_dir / generate_filename("cart", "csv")
            rows = [entry.to_dict() for entry in shop.cart_summary]
            if save_csv(pd.DataFrame(rows), cart_path):
                print(f"Cart saved to: {cart_path}")

        if not args.submit:
            return 0

        # Step 3: Submit order
        shop.form = CustomerForm(
            name=args.name,
            phone=args.phone,
            email=args.email,
            address=args.address
        )

        validation = CustomerValidator().validate(shop.form)
        if not validation.is_valid:
            print(f"\nERROR: Customer details invalid\n{validation.get_summary()}")
            return 1
        if shop.cart_count == 0:
            print("\nERROR: Cart is empty")
            return 1

        order = shop.order_submitter.build_order(shop.cart, shop.form, shop.lessons)

        if args.dry_run:
            print("\n[3/3] DRY RUN - Order not submitted:")
            print(pd.Series(order.to_dict()).to_string())
            logger.info("Dry run mode, skipping submission")
            return 0

        print("\n[3/3] Submitting order...")
        if not await shop.submit_order():
            print(f"ERROR: {shop.error}")
            return 1

        print(f"✓ Order placed: {len(order.items)} lesson(s), total {order.total}")

        if args.export_dir:
            receipt_path = args.export_dir / generate_filename("order", "json")
            if save_json(order.to_dict(), receipt_path):
                print(f"Receipt saved to: {receipt_path}")

        return 0


def main():
    """Main execution function."""
    args = parse_arguments()
    config.create_output_directories()

    logger = setup_logger(
        "lessonshop",
        level=getattr(logging, args.log_level or config.log_level, logging.INFO),
        log_file=str(config.output_dir / "logs" / "storefront.log")
    )

    try:
        logger.info("Validating configuration")
        config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        print(f"\nERROR: {e}")
        return 1

    try:
        return asyncio.run(run(args))

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
