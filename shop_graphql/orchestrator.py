"""
Export Orchestrator — Pipeline coordination for the shop GraphQL exporter.

Ties the ShopGraphQLClient and the polymorphic decoder into a sequential
workflow:

  Step 1: WEBHOOK SUBSCRIPTIONS
      Pages through webhookSubscriptions, decoding each endpoint into its
      concrete variant. Skipped when EXPORT_WEBHOOKS is false.

  Step 2: PRODUCT MEDIA
      For every configured product id, pages through product.media,
      decoding each node into MediaImage, Video, ExternalVideo or Model3d.

  Step 3: SAVE OUTPUT
      Serializes the decoded entities (with their __typename) to
      shop_export.json in a timestamped directory under OUTPUT_DIR.

Configuration:
    All settings are loaded from environment variables (typically via .env file).
    Required: SHOP_DOMAIN, SHOP_ACCESS_TOKEN.
    See settings.py for defaults.

Typical usage:
    orchestrator = ExportOrchestrator(env_file="./.env")
    if orchestrator.validate_config():
        results = orchestrator.run()
        orchestrator.print_summary(results)
"""

import json
import os
import re
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import requests
from dotenv import load_dotenv

from .errors import DecodeError
from .models import to_dict
from .settings import DEFAULT_SETTINGS
from .shop_client import ShopGraphQLClient

EXPORT_FILENAME = "shop_export.json"


def _env_bool(name: str) -> bool:
    return os.getenv(name, str(DEFAULT_SETTINGS[name])).lower() == "true"


class ExportOrchestrator:
    """Orchestrates the webhook subscription and product media export.

    Attributes:
        shop_domain: The shop's domain (e.g., "acme.myshopify.com").
        access_token: Admin API access token.
        api_version: Admin API version.
        page_size: Elements requested per connection page.
        gid_pattern: Regex extracting the type fragment from global ids.
        product_ids: Product GIDs whose media is exported.
        export_webhooks: Whether to export webhook subscriptions.
        output_dir: Root output directory.
        save_json: Whether to write the export to disk.
        debug: Whether to enable verbose output.
    """

    def __init__(self, env_file: str = "./.env"):
        """Initialize the orchestrator by loading configuration from environment.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        self.shop_domain = os.getenv("SHOP_DOMAIN", "")
        self.access_token = os.getenv("SHOP_ACCESS_TOKEN", "")
        self.api_version = os.getenv("SHOP_API_VERSION", DEFAULT_SETTINGS["SHOP_API_VERSION"])
        self.page_size = os.getenv("PAGE_SIZE", str(DEFAULT_SETTINGS["PAGE_SIZE"]))
        self.gid_pattern = os.getenv("GID_PATTERN", DEFAULT_SETTINGS["GID_PATTERN"])

        # Comma-separated product GIDs
        raw_products = os.getenv("PRODUCT_IDS", "")
        self.product_ids = [p.strip() for p in raw_products.split(",") if p.strip()]

        self.export_webhooks = _env_bool("EXPORT_WEBHOOKS")
        self.output_dir = os.getenv("OUTPUT_DIR", DEFAULT_SETTINGS["OUTPUT_DIR"])
        self.save_json = _env_bool("SAVE_JSON")
        self.debug = _env_bool("DEBUG")

    def validate_config(self) -> bool:
        """Validate that all required configuration values are present and usable.

        Checks:
            - SHOP_DOMAIN and SHOP_ACCESS_TOKEN are set
            - PAGE_SIZE is an integer between 1 and 250
            - GID_PATTERN compiles and has exactly one capture group
            - There is something to export

        Returns:
            True if the configuration is valid, False otherwise.
            Prints specific error messages for each problem.
        """
        errors = []
        if not self.shop_domain:
            errors.append("SHOP_DOMAIN is required")
        if not self.access_token:
            errors.append("SHOP_ACCESS_TOKEN is required")

        try:
            page_size = int(self.page_size)
            if not 1 <= page_size <= 250:
                errors.append("PAGE_SIZE must be between 1 and 250")
        except ValueError:
            errors.append(f"PAGE_SIZE must be an integer, got '{self.page_size}'")

        try:
            if re.compile(self.gid_pattern).groups != 1:
                errors.append("GID_PATTERN must have exactly one capture group")
        except re.error as e:
            errors.append(f"GID_PATTERN is not a valid regex: {e}")

        if not self.export_webhooks and not self.product_ids:
            errors.append("Nothing to export: set PRODUCT_IDS or EXPORT_WEBHOOKS=true")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    def build_client(self) -> ShopGraphQLClient:
        return ShopGraphQLClient(
            self.shop_domain,
            self.access_token,
            api_version=self.api_version,
            page_size=int(self.page_size),
            gid_pattern=self.gid_pattern,
            debug=self.debug,
        )

    def run(self) -> Dict[str, Any]:
        """Execute the export pipeline.

        Returns:
            A dict containing:
                - started_at/completed_at: ISO timestamps
                - config: Shop domain, API version and product ids
                - success: True if all steps completed without error
                - summary: Entity counts per kind
                - json_path: Path to the saved export (if save_json=True)
                - error: Error message (if success=False)
        """
        results = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "config": {
                "shop_domain": self.shop_domain,
                "api_version": self.api_version,
                "product_ids": self.product_ids,
            },
            "success": False,
        }

        client = self.build_client()
        try:
            export = {"webhookSubscriptions": [], "productMedia": {}}

            if self.export_webhooks:
                print(f"\n{'='*60}")
                print("STEP 1: WEBHOOK SUBSCRIPTIONS")
                print("="*60)
                subscriptions = client.fetch_all_webhook_subscriptions()
                export["webhookSubscriptions"] = [to_dict(s) for s in subscriptions]
                print(f"  Webhook subscriptions: {len(subscriptions)}")
                for kind, count in sorted(_count_kinds(s.endpoint for s in subscriptions).items()):
                    print(f"    {kind}: {count}")

            media_kinds = Counter()
            if self.product_ids:
                print(f"\n{'='*60}")
                print("STEP 2: PRODUCT MEDIA")
                print("="*60)
                for product_id in self.product_ids:
                    media = client.fetch_all_product_media(product_id)
                    export["productMedia"][product_id] = [to_dict(m) for m in media]
                    media_kinds.update(_count_kinds(media))
                    print(f"  {product_id}: {len(media)} media")

            print(f"\n{'='*60}")
            print("STEP 3: SAVE OUTPUT")
            print("="*60)
            if self.save_json:
                json_path = self._save_export(export)
                results["json_path"] = json_path
                print(f"  Saved export: {json_path}")
            else:
                print("  SAVE_JSON is false, nothing written")

            results["success"] = True
            results["summary"] = {
                "webhook_subscriptions": len(export["webhookSubscriptions"]),
                "products": len(export["productMedia"]),
                "media": dict(media_kinds),
            }

        except (DecodeError, requests.RequestException, RuntimeError) as e:
            results["error"] = f"{type(e).__name__}: {e}"
            print(f"\n  ERROR: {results['error']}")
            if self.debug:
                import traceback
                traceback.print_exc()
        finally:
            client.close()

        results["completed_at"] = datetime.now(timezone.utc).isoformat()
        return results

    def _save_export(self, export: Dict[str, Any]) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M")
        safe_shop = "".join(c if c.isalnum() or c in "-_" else "_" for c in self.shop_domain)
        run_dir = os.path.join(self.output_dir, f"{timestamp}_{safe_shop}")
        os.makedirs(run_dir, exist_ok=True)
        json_path = os.path.join(run_dir, EXPORT_FILENAME)
        with open(json_path, "w") as f:
            json.dump(export, f, indent=2)
        return json_path

    def print_summary(self, results: Dict):
        """Print a human-readable execution summary.

        Args:
            results: The dict returned by run().
        """
        print(f"\n{'='*60}")
        print("EXPORT COMPLETE")
        print("="*60)
        print(f"Status: {'SUCCESS' if results.get('success') else 'FAILED'}")

        summary = results.get("summary", {})
        if summary:
            print(f"Webhook subscriptions: {summary.get('webhook_subscriptions', 0)}")
            print(f"Products: {summary.get('products', 0)}")
            for kind, count in sorted(summary.get("media", {}).items()):
                print(f"  {kind}: {count}")

        if results.get("error"):
            print(f"Error: {results['error']}")


def _count_kinds(entities) -> Dict[str, int]:
    counts = Counter()
    for entity in entities:
        if entity is not None:
            counts[entity.kind] += 1
    return dict(counts)
