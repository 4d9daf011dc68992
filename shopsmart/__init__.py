"""ShopSmart product catalog: REST backend, API client and command-line view."""

__version__ = "0.1.0"
