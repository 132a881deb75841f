"""
Configuration Module

This module holds the options that control how documents are fetched and parsed.
"""

from typing import Dict, Optional


DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
)

DEFAULT_HEADERS = {
    'Accept': 'text/html,application/xhtml+xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
}


class FetchConfig:
    """
    Configuration class for document loading.

    This class holds all configuration options for fetching and parsing HTML.
    """

    def __init__(self,
                 timeout: float = 30.0,
                 user_agent: str = DEFAULT_USER_AGENT,
                 headers: Optional[Dict[str, str]] = None,
                 use_custom_headers: bool = True,
                 verify_ssl: bool = True,
                 parser: str = 'lxml',
                 headless: bool = True,
                 wait_for: str = 'domcontentloaded',
                 delay_after_load: float = 0,
                 use_stealth: bool = True,
                 debug: bool = False):
        """
        Initialize fetch configuration.

        Args:
            timeout (float): Request/navigation timeout in seconds
            user_agent (str): User-Agent header sent with every request
            headers (Optional[Dict[str, str]]): Extra HTTP headers, merged over the defaults
            use_custom_headers (bool): Send the default Accept/Accept-Language headers
            verify_ssl (bool): Verify TLS certificates
            parser (str): BeautifulSoup tree builder used to parse markup
            headless (bool): Run the Playwright browser in headless mode
            wait_for (str): Playwright load state considered a successful navigation
            delay_after_load (float): Delay in seconds after a rendered page loads
            use_stealth (bool): Hide common automation fingerprints in Playwright
            debug (bool): Enable debug logging
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.headers = dict(headers or {})
        self.use_custom_headers = use_custom_headers
        self.verify_ssl = verify_ssl
        self.parser = parser
        self.headless = headless
        self.wait_for = wait_for
        self.delay_after_load = delay_after_load
        self.use_stealth = use_stealth
        self.debug = debug

    def request_headers(self) -> Dict[str, str]:
        """Build the header set sent with every request."""
        headers = dict(DEFAULT_HEADERS) if self.use_custom_headers else {}
        headers['User-Agent'] = self.user_agent
        headers.update(self.headers)
        return headers
