# navigation.py
"""The navigation state machine behind the terminal UI.

The Navigator holds every piece of view state and is driven by plain method
calls: key presses from the shell and completed fetches from its workers.
Each call mutates the navigator and returns the effects the shell has to run
(network fetches, opening a browser, exiting). Nothing in here touches the
terminal or the network, so every transition can be exercised directly.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from loguru import logger

from .cache import DetailCache
from .models import BROWSING_STATES, ViewState, Work
from .rows import (DEFAULT_PALETTE, OPTION_BROWSE, OPTION_FIND_EPISODE, Palette,
                   TableView, episodes_table, format_details, options_table,
                   results_table, seasons_table)

# --- Effects ---
@dataclass(frozen=True)
class Search:
    query: str
    year: Optional[int] = None


@dataclass(frozen=True)
class FetchDetails:
    identifier: str


@dataclass(frozen=True)
class FetchEpisodes:
    identifier: str
    season: int


@dataclass(frozen=True)
class OpenBrowser:
    """Hand the url to the browser, then end the session."""
    url: str


@dataclass(frozen=True)
class CopyLink:
    url: str


@dataclass(frozen=True)
class Exit:
    code: int = 0
    message: str = ""


Effect = Union[Search, FetchDetails, FetchEpisodes, OpenBrowser, CopyLink, Exit]

BROWSE_HINT = ("RET: select | r: reviews | c: copy link | TAB: toggle details | "
               "up/down/n/p: move | b: back | s: new query | q: quit")
SERIES_HINT = ("RET: select | c: copy link | TAB: toggle details | "
               "up/down/n/p: move | b: back | s: new query | q: quit")
HINTS = {
    ViewState.LOADING: "Searching... | q: quit",
    ViewState.SEARCH_INPUT: "Press enter to search.",
    ViewState.SERIES_OPTIONS: SERIES_HINT,
    ViewState.SEASONS: SERIES_HINT,
}


class Navigator:
    """Owns the current screen, its rows, the cursor and the detail panel."""

    def __init__(self, query: str, year: Optional[int] = None,
                 palette: Palette = DEFAULT_PALETTE, cache: Optional[DetailCache] = None):
        self.state = ViewState.LOADING
        self.query = query
        self.year = year
        self.query_buffer = ""
        self.works: List[Work] = []
        self.selected_series: Optional[Work] = None
        self.table = TableView()
        self.revision = 0
        self.cursor = 0
        self.show_details = False
        self.detail_text = ""
        self.palette = palette
        self.cache = cache if cache is not None else DetailCache()

    @property
    def hint(self) -> str:
        return HINTS.get(self.state, BROWSE_HINT)

    @property
    def is_browsing(self) -> bool:
        return self.state in BROWSING_STATES

    @property
    def focused_work(self) -> Optional[Work]:
        """The work under the cursor, for screens whose rows carry one."""
        if self.state in (ViewState.RESULTS, ViewState.EPISODES) and self.table.rows:
            return self.table.rows[self.cursor].work
        return None

    @property
    def detail_target(self) -> Optional[str]:
        """Identifier whose details the panel should show."""
        if self.state in (ViewState.SERIES_OPTIONS, ViewState.SEASONS):
            return self.selected_series.identifier if self.selected_series else None
        work = self.focused_work
        return work.identifier if work else None

    def start(self) -> List[Effect]:
        return [Search(self.query, self.year)]

    # --- Search ---
    def search_completed(self, works: Sequence[Work]) -> List[Effect]:
        if self.state is not ViewState.LOADING:
            return []
        self.works = list(works)
        logger.info("Search finished", query=self.query, results=len(self.works))
        return self._show_results()

    def search_failed(self, error: Exception) -> List[Effect]:
        logger.error("Search failed", query=self.query, error=str(error))
        return [Exit(1, f"Error: {error}")]

    def new_query(self) -> List[Effect]:
        if not self.is_browsing:
            return []
        self.query_buffer = ""
        self.selected_series = None
        self._enter(ViewState.SEARCH_INPUT)
        return []

    def edit_query(self, text: str) -> List[Effect]:
        if self.state is ViewState.SEARCH_INPUT:
            self.query_buffer = text
        return []

    def submit_query(self) -> List[Effect]:
        if self.state is not ViewState.SEARCH_INPUT:
            return []
        query = self.query_buffer.strip()
        if not query:
            return []
        self.query = query
        self.query_buffer = ""
        self._enter(ViewState.LOADING)
        return [Search(query, self.year)]

    # --- Cursor and selection ---
    def move_cursor(self, delta: int) -> List[Effect]:
        if not self.is_browsing or not self.table.rows:
            return []
        return self.move_to(self.cursor + delta)

    def move_to(self, index: int) -> List[Effect]:
        if not self.is_browsing or not self.table.rows:
            return []
        index = max(0, min(index, len(self.table.rows) - 1))
        if index == self.cursor:
            return []
        self.cursor = index
        return self._refresh_details()

    def submit(self) -> List[Effect]:
        if not self.is_browsing or not self.table.rows:
            return []
        row = self.table.rows[self.cursor]

        if self.state is ViewState.RESULTS:
            if row.work.is_series:
                self.selected_series = row.work
                return self._show_options()
            return [OpenBrowser(row.work.url)]

        if self.state is ViewState.SERIES_OPTIONS:
            if row.key == OPTION_BROWSE:
                return [OpenBrowser(self.selected_series.url)]
            if row.key == OPTION_FIND_EPISODE:
                return self._show_seasons()
            return []

        if self.state is ViewState.SEASONS:
            return [FetchEpisodes(self.selected_series.identifier, int(row.key))]

        return [OpenBrowser(row.work.url)]

    def back(self) -> List[Effect]:
        if self.state is ViewState.SERIES_OPTIONS:
            self.selected_series = None
            return self._show_results()
        if self.state is ViewState.SEASONS:
            return self._show_options()
        if self.state is ViewState.EPISODES:
            return self._show_seasons()
        return []

    # --- Episodes ---
    def episodes_loaded(self, identifier: str, season: int, episodes: Sequence[Work]) -> List[Effect]:
        series = self.selected_series
        if self.state is not ViewState.SEASONS or series is None or series.identifier != identifier:
            logger.debug("Dropping stale episode list", identifier=identifier, season=season)
            return []
        logger.info("Episodes loaded", identifier=identifier, season=season, count=len(episodes))
        self._rebuild(ViewState.EPISODES, episodes_table(episodes, self.palette))
        return self._refresh_details()

    def episodes_failed(self, error: Exception) -> List[Effect]:
        logger.error("Episode fetch failed", error=str(error))
        return [Exit(1, f"Error fetching episodes: {error}")]

    # --- Detail panel ---
    def toggle_details(self) -> List[Effect]:
        if not self.is_browsing:
            return []
        self.show_details = not self.show_details
        if self.show_details:
            return self._refresh_details()
        return []

    def details_loaded(self, identifier: str, work: Work) -> List[Effect]:
        self.cache.put(identifier, work)
        if self.show_details and self.detail_target == identifier:
            self.detail_text = format_details(work)
        return []

    def details_failed(self, identifier: str, error: Exception) -> List[Effect]:
        logger.warning("Detail fetch failed", identifier=identifier, error=str(error))
        self.cache.discard_pending(identifier)
        if self.show_details and self.detail_target == identifier:
            self.detail_text = f"Could not load details: {error}"
        return []

    # --- Outbound actions ---
    def open_reviews(self) -> List[Effect]:
        work = self.focused_work
        if work is None:
            return []
        return [OpenBrowser(work.reviews_url)]

    def copy_link(self) -> List[Effect]:
        work = self.focused_work or (self.selected_series if self.is_browsing else None)
        if work is None:
            return []
        return [CopyLink(work.url)]

    def quit(self) -> List[Effect]:
        return [Exit(0)]

    # --- Internal transitions ---
    def _enter(self, state: ViewState) -> None:
        logger.debug("Navigation", source=self.state.value, target=state.value)
        self.state = state

    def _rebuild(self, state: ViewState, table: TableView) -> None:
        self._enter(state)
        self.table = table
        self.cursor = 0
        self.revision += 1

    def _show_results(self) -> List[Effect]:
        self._rebuild(ViewState.RESULTS, results_table(self.works, self.palette))
        return self._refresh_details()

    def _show_options(self) -> List[Effect]:
        self._rebuild(ViewState.SERIES_OPTIONS, options_table())
        return self._refresh_details()

    def _show_seasons(self) -> List[Effect]:
        raw_count = self.selected_series.season_count
        try:
            count = int(raw_count)
        except ValueError:
            count = 0
        if count < 1:
            logger.error("Invalid seasons count", identifier=self.selected_series.identifier,
                         season_count=raw_count)
            return [Exit(1, f"Invalid seasons count: {raw_count}")]
        self._rebuild(ViewState.SEASONS, seasons_table(count))
        return self._refresh_details()

    def _refresh_details(self) -> List[Effect]:
        if not self.show_details:
            return []
        identifier = self.detail_target
        if identifier is None:
            return []
        cached = self.cache.get(identifier)
        if cached is not None:
            self.detail_text = format_details(cached)
            return []
        if not self.cache.needs_fetch(identifier):
            return []
        self.cache.mark_pending(identifier)
        return [FetchDetails(identifier)]
