# services.py
import subprocess
import sys
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from .models import Work, WorkKind

NOT_FOUND = "Movie not found!"


class OMDbError(Exception):
    """Raised when an OMDb request fails or the provider reports an error."""


class UnsupportedPlatformError(Exception):
    """Raised when no browser command is known for the running platform."""


class OMDbClient:
    """A client for the three read-only OMDb lookups the browser needs."""

    def __init__(self, api_key: str, base_url: str = "https://www.omdbapi.com/",
                 http_client: Optional[httpx.Client] = None):
        self.base_url = base_url
        self._api_key = api_key
        self._client = http_client or httpx.Client()

    def close(self) -> None:
        self._client.close()

    def _get(self, **params: Any) -> Dict[str, Any]:
        """Performs one GET, raising OMDbError for transport, HTTP and provider errors."""
        logger.debug("OMDb request", params=params)
        try:
            response = self._client.get(self.base_url, params={**params, "apikey": self._api_key})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise OMDbError(f"Request failed: {e}") from e
        except ValueError as e:
            raise OMDbError("Invalid JSON in provider response") from e

        if not isinstance(data, dict):
            raise OMDbError("Unexpected provider response")
        if data.get("Response") == "False":
            raise OMDbError(data.get("Error", "Unknown provider error"))
        return data

    def search(self, query: str, year: Optional[int] = None) -> List[str]:
        """Returns the identifiers of the titles matching the query."""
        params: Dict[str, Any] = {"s": query}
        if year is not None:
            params["y"] = year
        try:
            data = self._get(**params)
        except OMDbError as e:
            if str(e) == NOT_FOUND:
                return []
            raise
        return [item["imdbID"] for item in data.get("Search", []) if item.get("imdbID")]

    def fetch_details(self, identifier: str) -> Work:
        return self._parse_item(self._get(i=identifier))

    def fetch_episodes(self, identifier: str, season: int) -> List[Work]:
        data = self._get(i=identifier, Season=season)
        return [self._parse_item(item, WorkKind.EPISODE) for item in data.get("Episodes", [])]

    def search_works(self, query: str, year: Optional[int] = None) -> List[Work]:
        """Searches, then fetches the full record of every hit in result order."""
        return [self.fetch_details(identifier) for identifier in self.search(query, year)]

    def _parse_item(self, item: dict, kind: Optional[WorkKind] = None) -> Work:
        """Parses a single raw API item into our Work data model."""
        if not item.get("imdbID"):
            raise OMDbError("Provider record has no imdbID")
        return Work(
            identifier=item["imdbID"],
            title=item.get("Title", "N/A"),
            year=item.get("Year", "N/A"),
            kind=kind or WorkKind(item.get("Type", "unknown")),
            rating=item.get("imdbRating", "N/A"),
            runtime=item.get("Runtime", "N/A"),
            season_count=item.get("totalSeasons", "N/A"),
            genre=item.get("Genre", "N/A"),
            director=item.get("Director", "N/A"),
            actors=item.get("Actors", "N/A"),
            plot=item.get("Plot", "N/A"),
            awards=item.get("Awards", "N/A"),
            episode=item.get("Episode", ""),
            released=item.get("Released", "N/A"),
        )


class BrowserLauncher:
    """A service to hand urls to the platform's default browser."""
    COMMANDS = {
        "darwin": ["open"],
        "linux": ["xdg-open"],
        "win32": ["cmd", "/c", "start", ""],
    }

    def __init__(self, platform: str = sys.platform):
        key = "linux" if platform.startswith("linux") else platform
        if key not in self.COMMANDS:
            raise UnsupportedPlatformError(f"Unsupported OS: {platform}")
        self.command = self.COMMANDS[key]

    def open(self, url: str) -> None:
        """Starts the browser command without waiting for it."""
        logger.info("Opening browser", url=url)
        subprocess.Popen(
            [*self.command, url],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
