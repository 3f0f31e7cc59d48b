#!/usr/bin/env python3
"""
Shop GraphQL Exporter — Entry Point.

Reads configuration from a .env file, pages through the shop's webhook
subscriptions and product media, decodes every polymorphic value into its
concrete type, and saves the result as timestamped JSON.

Usage:
    python run.py                              # Export using .env settings
    python run.py --debug                      # Verbose output
    python run.py --product gid://shopify/Product/1 --product gid://shopify/Product/2
    python run.py --no-webhooks                # Only export product media
    python run.py --version                    # Show version
    python run.py --env /path                  # Use alternate .env file
"""

import argparse
import logging
import sys

from shop_graphql import ExportOrchestrator, __version__


def main():
    """Parse CLI arguments and run the export pipeline."""
    parser = argparse.ArgumentParser(
        description="Shop GraphQL Exporter - Export webhook subscriptions and product media"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument(
        "--product", "-p", action="append", default=[],
        help="Product GID whose media to export (repeatable, overrides PRODUCT_IDS)",
    )
    parser.add_argument("--no-webhooks", action="store_true", help="Skip webhook subscriptions")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    args = parser.parse_args()

    if args.version:
        print(f"shop-graphql-decoder {__version__}")
        sys.exit(0)

    # Show HTTP traffic from requests/urllib3 as well
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s'
        )

    orchestrator = ExportOrchestrator(env_file=args.env)

    # Apply CLI overrides on top of .env values
    if args.debug:
        orchestrator.debug = True
    if args.product:
        orchestrator.product_ids = args.product
    if args.no_webhooks:
        orchestrator.export_webhooks = False

    print(f"\n{'='*60}")
    print(f"SHOP GRAPHQL EXPORTER v{__version__}")
    print("="*60)
    print(f"Shop: {orchestrator.shop_domain}")
    print(f"Webhooks: {'Enabled' if orchestrator.export_webhooks else 'Disabled'}")
    print(f"Products: {len(orchestrator.product_ids)}")

    if not orchestrator.validate_config():
        sys.exit(1)

    results = orchestrator.run()
    orchestrator.print_summary(results)

    if not results.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
