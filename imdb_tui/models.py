# models.py
from dataclasses import dataclass
from enum import Enum

IMDB_TITLE_URL = "https://www.imdb.com/title"


class WorkKind(str, Enum):
    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"
    GAME = "game"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class ViewState(Enum):
    """The screen the navigator is currently showing."""
    LOADING = "loading"
    SEARCH_INPUT = "search_input"
    RESULTS = "results"
    SERIES_OPTIONS = "series_options"
    SEASONS = "seasons"
    EPISODES = "episodes"


BROWSING_STATES = frozenset({
    ViewState.RESULTS,
    ViewState.SERIES_OPTIONS,
    ViewState.SEASONS,
    ViewState.EPISODES,
})


@dataclass(frozen=True)
class Work:
    """A movie, series or episode record as returned by the provider."""
    identifier: str
    title: str
    year: str = "N/A"
    kind: WorkKind = WorkKind.UNKNOWN
    rating: str = "N/A"
    runtime: str = "N/A"
    season_count: str = "N/A"
    genre: str = "N/A"
    director: str = "N/A"
    actors: str = "N/A"
    plot: str = "N/A"
    awards: str = "N/A"
    episode: str = ""
    released: str = "N/A"

    @property
    def is_series(self) -> bool:
        return self.kind is WorkKind.SERIES

    @property
    def url(self) -> str:
        return f"{IMDB_TITLE_URL}/{self.identifier}"

    @property
    def reviews_url(self) -> str:
        return f"{self.url}/reviews"
