"""Reddit post source for social sentiment.

Searches a single community (r/CryptoCurrency) for recent posts mentioning an
asset and returns their titles.

API Reference:
    Token:  POST https://www.reddit.com/api/v1/access_token
            (HTTP basic auth with client id/secret, grant_type=password)
    Search: GET https://oauth.reddit.com/r/{subreddit}/search
            ?q={query}&restrict_sr=1&sort=new&limit={limit}
    Payload: {"data": {"children": [{"data": {"title": "..."}}, ...]}}

Reddit requires a descriptive User-Agent on every request.
"""

import time
from pathlib import Path

import requests

from src.shared.config import Config
from src.shared.utils import setup_logger


class SentimentSourceError(Exception):
    """The social source could not be queried."""


class RedditSource:
    """Fetches post titles from one subreddit via Reddit's OAuth API."""

    TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
    API_BASE = "https://oauth.reddit.com"
    SEARCH_ENDPOINT = "/r/{subreddit}/search"

    DEFAULT_SUBREDDIT = "cryptocurrency"
    USER_AGENT = "crypto-signal-bot/0.1"
    MAX_LIMIT = 100
    TOKEN_EXPIRY_MARGIN = 60.0  # seconds

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        username: str | None = None,
        password: str | None = None,
        subreddit: str = DEFAULT_SUBREDDIT,
        session: requests.Session | None = None,
        timeout: float | None = None,
        log_file: Path | None = None,
    ) -> None:
        """Initialize the Reddit source.

        Credentials default to the REDDIT_* values in Config.
        """
        self.client_id = client_id or Config.REDDIT_CLIENT_ID
        self.client_secret = client_secret or Config.REDDIT_CLIENT_SECRET
        self.username = username or Config.REDDIT_USER
        self.password = password or Config.REDDIT_PASS
        self.subreddit = subreddit
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.logger = setup_logger(self.__class__.__name__, log_file)

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.USER_AGENT})
        self._token: str | None = None
        self._token_expires_at: float = 0.0

    @property
    def is_configured(self) -> bool:
        return all((self.client_id, self.client_secret, self.username, self.password))

    def search(self, query: str, limit: int = 50) -> list[str]:
        """Return titles of recent posts matching `query`.

        Raises:
            SentimentSourceError: On missing credentials, HTTP errors or an
                unexpected payload.
        """
        token = self._access_token()
        url = f"{self.API_BASE}{self.SEARCH_ENDPOINT.format(subreddit=self.subreddit)}"
        params = {
            "q": query,
            "restrict_sr": 1,
            "sort": "new",
            "limit": min(limit, self.MAX_LIMIT),
        }
        try:
            response = self._session.get(
                url,
                params=params,
                headers={"Authorization": f"bearer {token}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise SentimentSourceError(f"Reddit search failed: {exc}") from exc

        try:
            children = payload["data"]["children"]
        except (KeyError, TypeError) as exc:
            raise SentimentSourceError("Unexpected Reddit search payload") from exc

        titles = [
            child["data"]["title"]
            for child in children[:limit]
            if isinstance(child, dict) and (child.get("data") or {}).get("title")
        ]
        self.logger.debug("Fetched %d Reddit posts for %r", len(titles), query)
        return titles

    def _access_token(self) -> str:
        if not self.is_configured:
            raise SentimentSourceError("Reddit credentials are not configured")

        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        try:
            response = self._session.post(
                self.TOKEN_URL,
                auth=(self.client_id, self.client_secret),
                data={
                    "grant_type": "password",
                    "username": self.username,
                    "password": self.password,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise SentimentSourceError(f"Reddit authentication failed: {exc}") from exc

        if not isinstance(payload, dict) or not payload.get("access_token"):
            reason = payload.get("error", "no token") if isinstance(payload, dict) else "no token"
            raise SentimentSourceError(f"Reddit authentication failed: {reason}")

        token = str(payload["access_token"])

        expires_in = float(payload.get("expires_in", 3600))
        self._token = token
        self._token_expires_at = time.monotonic() + max(expires_in - self.TOKEN_EXPIRY_MARGIN, 0.0)
        self.logger.info("Obtained Reddit access token (expires in %.0fs)", expires_in)
        return token
