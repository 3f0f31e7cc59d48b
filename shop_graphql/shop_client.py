"""
Shop GraphQL Client — Issues read-only Admin API queries and decodes the results.

All HTTP traffic goes through a single requests.Session carrying the
X-Shopify-Access-Token header. Responses are decoded with unwrap_connection(),
so callers receive typed Connection pages rather than raw JSON.

Endpoint:
    POST https://{shop_domain}/admin/api/{api_version}/graphql.json
    Body: {"query": "...", "variables": {...}}

Pagination:
    Each page request passes "after" = the previous page's pageInfo.endCursor
    and stops once pageInfo.hasNextPage is false.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional

import requests

from .connection import unwrap_connection
from .errors import MissingContainer
from .graphql_queries import PRODUCT_MEDIA_QUERY, WEBHOOK_SUBSCRIPTIONS_QUERY
from .models import Connection, Media, WebhookSubscription
from .registry import MEDIA_FAMILY, WEBHOOK_SUBSCRIPTION_FAMILY
from .settings import DEFAULT_SETTINGS


class ShopGraphQLClient:
    """Client for the shop Admin GraphQL API.

    Attributes:
        shop_domain: The shop's domain (e.g., "acme.myshopify.com").
        api_version: Admin API version (e.g., "2024-01").
        page_size: Elements requested per connection page.
        debug: If True, print each request and page summary.
        media_family: Entity family used to decode media nodes.
        webhook_family: Entity family used to decode webhook subscriptions.
    """

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str = DEFAULT_SETTINGS["SHOP_API_VERSION"],
        page_size: int = DEFAULT_SETTINGS["PAGE_SIZE"],
        gid_pattern: Optional[str] = None,
        debug: bool = False,
    ):
        """Initialize the client.

        Args:
            shop_domain: Shop domain, with or without a scheme.
            access_token: Admin API access token.
            api_version: Admin API version segment of the endpoint URL.
            page_size: Elements per page (the API caps this at 250).
            gid_pattern: Override for the GID pattern of both families.
            debug: Enable verbose output.
        """
        domain = shop_domain.strip().rstrip("/")
        for scheme in ("https://", "http://"):
            if domain.startswith(scheme):
                domain = domain[len(scheme):]
        self.shop_domain = domain
        self.api_version = api_version
        self.page_size = page_size
        self.debug = debug
        self.media_family = MEDIA_FAMILY
        self.webhook_family = WEBHOOK_SUBSCRIPTION_FAMILY
        if gid_pattern:
            self.media_family = MEDIA_FAMILY.with_gid_pattern(gid_pattern)
            self.webhook_family = WEBHOOK_SUBSCRIPTION_FAMILY.with_gid_pattern(gid_pattern)
        self._session = requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        })

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop_domain}/admin/api/{self.api_version}/graphql.json"

    def execute_graphql(self, query: str, variables: Optional[Dict] = None) -> Dict[str, Any]:
        """Execute a GraphQL query against the shop.

        Args:
            query: The GraphQL query string.
            variables: Optional dict of GraphQL variables.

        Returns:
            The "data" portion of the GraphQL response.

        Raises:
            RuntimeError: If the GraphQL response contains errors.
            requests.HTTPError: If the HTTP request fails.
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        if self.debug:
            print(f"  Executing GraphQL query ({len(query)} chars) variables={variables}")

        response = self._session.post(self.graphql_url, json=payload, timeout=30)
        response.raise_for_status()

        result = response.json()

        if result.get("errors"):
            error_messages = [e.get("message", str(e)) for e in result["errors"]]
            raise RuntimeError(f"GraphQL errors: {'; '.join(error_messages)}")

        return result.get("data") or {}

    def get_webhook_subscriptions_page(self, after: Optional[str] = None) -> Connection:
        """Fetch and decode one page of webhook subscriptions."""
        data = self.execute_graphql(
            WEBHOOK_SUBSCRIPTIONS_QUERY, {"first": self.page_size, "after": after}
        )
        return unwrap_connection(data, "webhookSubscriptions", self.webhook_family)

    def get_product_media_page(self, product_id: str, after: Optional[str] = None) -> Connection:
        """Fetch and decode one page of a product's media.

        Raises:
            MissingContainer: If the product does not exist.
        """
        data = self.execute_graphql(
            PRODUCT_MEDIA_QUERY, {"id": product_id, "first": self.page_size, "after": after}
        )
        product = data.get("product")
        if not isinstance(product, dict):
            raise MissingContainer(f"product '{product_id}' not found", ["product"])
        return unwrap_connection(product, "media", self.media_family)

    def iter_webhook_subscriptions(self) -> Iterator[WebhookSubscription]:
        for page in self._iter_pages(self.get_webhook_subscriptions_page):
            yield from page.entities()

    def iter_product_media(self, product_id: str) -> Iterator[Media]:
        def fetch_page(after):
            return self.get_product_media_page(product_id, after)

        for page in self._iter_pages(fetch_page):
            yield from page.entities()

    def fetch_all_webhook_subscriptions(self) -> List[WebhookSubscription]:
        subscriptions = list(self.iter_webhook_subscriptions())
        if self.debug:
            print(f"  Fetched {len(subscriptions)} webhook subscriptions")
        return subscriptions

    def fetch_all_product_media(self, product_id: str) -> List[Media]:
        media = list(self.iter_product_media(product_id))
        if self.debug:
            print(f"  Fetched {len(media)} media for {product_id}")
        return media

    def _iter_pages(self, fetch_page: Callable[[Optional[str]], Connection]) -> Iterator[Connection]:
        """Yield pages until pageInfo reports no next page."""
        after = None
        page_number = 0
        while True:
            page = fetch_page(after)
            page_number += 1
            if self.debug:
                print(f"  Page {page_number}: {len(page.edges)} edges, {len(page.nodes)} nodes")
            yield page

            page_info = page.page_info
            if page_info is None or not page_info.has_next_page or not page_info.end_cursor:
                return
            after = page_info.end_cursor

    def close(self):
        self._session.close()
