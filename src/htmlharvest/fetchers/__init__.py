"""
htmlharvest Fetchers Module

This module provides fetcher implementations for retrieving raw HTML:
- HttpFetcher: plain HTTP GET over a requests Session
- PlaywrightFetcher: JavaScript-rendered pages via a headless browser
"""

from .base_fetcher import BaseFetcher, FetchedPage
from .http_fetcher import HttpFetcher
from .playwright_fetcher import PlaywrightFetcher
