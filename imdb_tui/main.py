# main.py
import asyncio
from typing import Annotated, Iterable, Optional

import pyperclip
import typer
from loguru import logger
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Header

from . import __version__
from .config import Config, ConfigError, load_api_key
from .logging_config import configure_logging
from .models import ViewState
from .navigation import (CopyLink, Effect, Exit, FetchDetails, FetchEpisodes,
                         Navigator, OpenBrowser, Search)
from .services import (BrowserLauncher, OMDbClient, OMDbError,
                       UnsupportedPlatformError)
from .ui import DetailsPane, HintBar, LoadingPane, ResultsDisplay, SearchControls


class ImdbApp(App):
    CSS_PATH = "imdb_tui.tcss"
    TITLE = "imdb"
    AUTO_FOCUS = None
    BINDINGS = [Binding("q,ctrl+c", "request_quit", "Quit", show=False)]

    def __init__(self, navigator: Navigator, client: OMDbClient, launcher: BrowserLauncher):
        super().__init__()
        self.navigator = navigator
        self.client = client
        self.launcher = launcher
        self.exit_message = ""
        self._rendered_revision = -1
        self._rendered_state: Optional[ViewState] = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield LoadingPane(id="loading")
            yield SearchControls(id="search-controls")
            yield ResultsDisplay(id="results-table")
            yield HintBar(id="hint")
            yield DetailsPane(id="details-pane")

    def on_mount(self) -> None:
        self.apply_effects(self.navigator.start())

    def apply_effects(self, effects: Iterable[Effect]) -> None:
        """Runs the effects of one navigator transition, then re-renders."""
        for effect in effects:
            self.run_effect(effect)
        self.refresh_view()

    def run_effect(self, effect: Effect) -> None:
        if isinstance(effect, Search):
            self.run_worker(self.perform_search(effect.query, effect.year),
                            group="search_worker", exclusive=True)
        elif isinstance(effect, FetchDetails):
            self.run_worker(self.perform_fetch_details(effect.identifier), group="details_worker")
        elif isinstance(effect, FetchEpisodes):
            self.run_worker(self.perform_fetch_episodes(effect.identifier, effect.season),
                            group="episodes_worker", exclusive=True)
        elif isinstance(effect, OpenBrowser):
            self.open_in_browser(effect.url)
        elif isinstance(effect, CopyLink):
            self.copy_link_to_clipboard(effect.url)
        elif isinstance(effect, Exit):
            self.leave(effect.code, effect.message)

    def refresh_view(self) -> None:
        """Pushes the navigator's state to the widgets."""
        nav = self.navigator
        palette = nav.palette
        loading = self.query_one(LoadingPane)
        controls = self.query_one(SearchControls)
        table = self.query_one(ResultsDisplay)
        details = self.query_one(DetailsPane)

        loading.display = nav.state is ViewState.LOADING
        controls.display = nav.state is ViewState.SEARCH_INPUT
        table.display = nav.is_browsing
        details.display = nav.show_details and nav.is_browsing
        self.query_one(HintBar).show_hint(nav.hint, palette.hint)
        details.update_details(nav.detail_text, palette.info)

        entered = nav.state is not self._rendered_state
        self._rendered_state = nav.state
        if nav.state is ViewState.LOADING:
            loading.show_query(nav.query)
        elif nav.state is ViewState.SEARCH_INPUT:
            if entered:
                controls.reset()
        else:
            if nav.revision != self._rendered_revision:
                table.show(nav.table)
                self._rendered_revision = nav.revision
            elif entered:
                table.focus()
            table.sync_cursor(nav.cursor)

    # --- Actions (bound on the results table) ---
    def action_move_cursor(self, delta: int) -> None:
        self.apply_effects(self.navigator.move_cursor(delta))

    def action_submit(self) -> None:
        self.apply_effects(self.navigator.submit())

    def action_back(self) -> None:
        self.apply_effects(self.navigator.back())

    def action_toggle_details(self) -> None:
        self.apply_effects(self.navigator.toggle_details())

    def action_new_query(self) -> None:
        self.apply_effects(self.navigator.new_query())

    def action_open_reviews(self) -> None:
        self.apply_effects(self.navigator.open_reviews())

    def action_copy_link(self) -> None:
        self.apply_effects(self.navigator.copy_link())

    def action_request_quit(self) -> None:
        self.apply_effects(self.navigator.quit())

    # --- Message Handlers ---
    def on_search_controls_query_edited(self, message: SearchControls.QueryEdited) -> None:
        self.navigator.edit_query(message.text)

    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        self.navigator.edit_query(message.query)
        self.apply_effects(self.navigator.submit_query())

    # --- Side effects ---
    def open_in_browser(self, url: str) -> None:
        try:
            self.launcher.open(url)
        except OSError as e:
            logger.error("Could not open browser", url=url, error=str(e))
            self.leave(1, f"Error opening browser: {e}")
            return
        self.leave(0)

    def copy_link_to_clipboard(self, url: str) -> None:
        try:
            pyperclip.copy(url)
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard unavailable", error=str(e))
            self.notify(f"Could not copy link: {e}", severity="error")
            return
        self.notify(f"Copied {url}")

    def leave(self, code: int, message: str = "") -> None:
        self.exit_message = message
        self.exit(return_code=code)

    # --- Worker Methods ---
    async def perform_search(self, query: str, year: Optional[int]) -> None:
        try:
            works = await asyncio.to_thread(self.client.search_works, query, year)
        except OMDbError as e:
            self.apply_effects(self.navigator.search_failed(e))
            return
        self.apply_effects(self.navigator.search_completed(works))

    async def perform_fetch_details(self, identifier: str) -> None:
        try:
            work = await asyncio.to_thread(self.client.fetch_details, identifier)
        except OMDbError as e:
            self.apply_effects(self.navigator.details_failed(identifier, e))
            return
        self.apply_effects(self.navigator.details_loaded(identifier, work))

    async def perform_fetch_episodes(self, identifier: str, season: int) -> None:
        try:
            episodes = await asyncio.to_thread(self.client.fetch_episodes, identifier, season)
        except OMDbError as e:
            self.apply_effects(self.navigator.episodes_failed(e))
            return
        self.apply_effects(self.navigator.episodes_loaded(identifier, season, episodes))


# --- Command line ---
cli = typer.Typer(add_completion=False, help="Search OMDb and browse the results in the terminal.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"imdb-tui {__version__}")
        raise typer.Exit()


@cli.command()
def search(
    query: Annotated[str, typer.Argument(help="Title to search for")],
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Year of release")] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit"),
    ] = None,
) -> None:
    """Search OMDb for QUERY and browse the matching titles."""
    config = Config()
    configure_logging(
        log_level=config.LOG_LEVEL,
        log_file=config.LOG_FILE,
        rotation_size=config.LOG_ROTATION,
        retention_count=config.LOG_RETENTION,
    )

    try:
        api_key = load_api_key(config)
        launcher = BrowserLauncher()
    except (ConfigError, UnsupportedPlatformError) as e:
        logger.error("Startup failed", error=str(e))
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    logger.info("Starting imdb-tui", query=query, year=year, version=__version__)
    client = OMDbClient(api_key, base_url=config.API_BASE_URL)
    app = ImdbApp(Navigator(query, year), client, launcher)
    try:
        app.run()
    finally:
        client.close()

    if app.exit_message:
        typer.echo(app.exit_message)
    raise typer.Exit(code=app.return_code or 0)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
