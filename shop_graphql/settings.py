"""
Settings — Default configuration values for the shop GraphQL exporter.

The ExportOrchestrator uses DEFAULT_SETTINGS as fallback values when
environment variables are not set. The actual configuration is loaded from
.env at runtime.

Configuration precedence (highest to lowest):
  1. CLI flags (--debug, --product, --no-webhooks)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  SHOP_API_VERSION   Admin API version segment of the GraphQL endpoint URL
  PAGE_SIZE          Number of elements requested per connection page
  GID_PATTERN        Regex with one capture group extracting the type from a GID
  EXPORT_WEBHOOKS    Whether to export webhook subscriptions (default: True)
  OUTPUT_DIR         Where to write export output (default: ./output)
  SAVE_JSON          Whether to write the export to disk (default: True)
  DEBUG              Whether to print verbose output (default: False)
"""

# Global IDs look like "gid://shopify/MediaImage/1072273166"
DEFAULT_GID_PATTERN = r"^gid://shopify/(\w+)/\d+"

DEFAULT_SETTINGS = {
    "SHOP_API_VERSION": "2024-01",
    "PAGE_SIZE": 50,
    "GID_PATTERN": DEFAULT_GID_PATTERN,
    "EXPORT_WEBHOOKS": True,
    "OUTPUT_DIR": "./output",
    "SAVE_JSON": True,
    "DEBUG": False,
}
