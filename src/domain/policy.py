from collections.abc import Mapping

from src.rules.models import Rules


class StorefrontPolicy:
    """Rules-driven answers about storefront requests."""

    def __init__(self, rules: Rules):
        self.rules = rules

    def is_store_page(self, path: str) -> bool:
        """
        Whether a request path belongs to the storefront.

        Exact matches on the configured pages (shop, cart, checkout, account),
        plus anything under a product prefix.
        """
        pages = self.rules.store_pages
        normalized = "/" + path.strip("/")
        if normalized in {"/" + p.strip("/") for p in pages.paths}:
            return True
        return any(normalized.startswith(prefix.rstrip("/") + "/") for prefix in pages.prefixes)

    def is_preview(self, query: Mapping[str, str]) -> bool:
        """Site preview requests carry the preview query parameter, any value."""
        return self.rules.banner.preview_query_param in query
