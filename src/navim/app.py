# =============================================================================
# Navim Main Application
# =============================================================================
# The Textual application class and the `navim` command.
#
# Searching happens before the TUI starts: the query comes from the command
# line and only a non-empty result list opens the interface. The app then
# shows one of three starting screens:
#   - ResultsScreen for a search
#   - HistoryScreen for `navim --history`
#   - AboutScreen for `navim about`
#
# The app owns the long-lived resources shared by the screens: the HTTP
# client, the render engine and the history database connection.
# =============================================================================

import argparse
import asyncio
import enum
import logging
import sys
from pathlib import Path

import aiosqlite
from textual.app import App

from navim import __app_name__, __version__
from navim.config import Config, ConfigError, ensure_directories, print_paths
from navim.core import HistoryEntry, SearchResult
from navim.net import BraveSearch, HttpClient, SearchError
from navim.rendering import RenderEngine
from navim.storage import Database, HistoryRepository
from navim.ui.screens import AboutScreen, HistoryScreen, ResultsScreen

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    """Which screen the app starts on."""
    SEARCH = "search"
    HISTORY = "history"
    ABOUT = "about"


class NavimApp(App):
    """
    The main Navim application.

    Attributes:
        config: The loaded application configuration.
        client: HTTP client used for pages and images.
        engine: Page renderer, wired to the client's image fetcher.
        history_repo: History repository, or None when history is disabled
                      or the database couldn't be opened.
    """

    TITLE = "Navim"
    SUB_TITLE = "Terminal Web Browser"

    def __init__(
        self,
        config: Config,
        mode: Mode = Mode.SEARCH,
        query: str = "",
        results: list[SearchResult] | None = None,
        entries: list[HistoryEntry] | None = None,
        client: HttpClient | None = None,
    ) -> None:
        """
        Initialize the application.

        Args:
            config: Application configuration.
            mode: Starting screen.
            query: Search query (SEARCH mode).
            results: Search results to list (SEARCH mode).
            entries: History entries to list (HISTORY mode).
            client: HTTP client. A new one is created if omitted.
        """
        super().__init__()
        self.config = config
        self.start_mode = mode
        self.search_query = query
        self.results = results or []
        self.entries = entries or []
        self.client = client or HttpClient(
            config.network, min_image_bytes=config.rendering.min_image_bytes
        )
        self.engine = RenderEngine(config.rendering, fetch_image=self.client.fetch_image)
        self.history_repo: HistoryRepository | None = None
        self._db: Database | None = None

    async def on_mount(self) -> None:
        """Open the history database and show the starting screen."""
        if self.config.history.enabled and self.start_mode == Mode.SEARCH:
            self._db = Database()
            try:
                await self._db.connect()
                self.history_repo = HistoryRepository(self._db, self.config.history.max_entries)
            except (aiosqlite.Error, OSError) as e:
                logger.warning(f"History unavailable: {e}")
                self._db = None
                self.notify("History unavailable", severity="warning")

        if self.start_mode == Mode.HISTORY:
            await self.push_screen(HistoryScreen(self.entries))
        elif self.start_mode == Mode.ABOUT:
            await self.push_screen(AboutScreen())
        else:
            await self.push_screen(ResultsScreen(self.search_query, self.results))

    async def on_unmount(self) -> None:
        if self._db is not None:
            await self._db.close()
        self.client.close()

    async def record_visit(self, query: str, title: str, url: str) -> None:
        """
        Add an opened page to the history.

        Failures are logged and otherwise ignored; history is best-effort.
        """
        if self.history_repo is None:
            return
        try:
            await self.history_repo.add_entry(HistoryEntry(query=query, title=title, url=url))
        except aiosqlite.Error as e:
            logger.warning(f"Failed to record history entry for {url}: {e}")


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Navim: a vim-style terminal web browser",
        epilog="Example: navim rust programming",
    )

    parser.add_argument(
        "query",
        nargs="*",
        help="Search query, or 'about' to show information about Navim",
    )

    parser.add_argument(
        "-H", "--history",
        action="store_true",
        help="Show browsing history",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """
    Send log records to the log file in the XDG state directory.

    The terminal belongs to the TUI, so nothing is logged to stderr.
    """
    log_path = Config.log_file_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_path,
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def load_history(config: Config) -> list[HistoryEntry]:
    """Read all history entries, newest first."""
    async with Database() as db:
        repo = HistoryRepository(db, config.history.max_entries)
        return await repo.get_entries()


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for Navim.

    This function:
        1. Parses command-line arguments
        2. Handles special commands (--paths, about, --history)
        3. Loads configuration
        4. Runs the search and starts the Textual application

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_args(argv)

    if args.paths:
        print_paths()
        return 0

    setup_logging(args.debug)

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    query = " ".join(args.query).strip()

    if args.history:
        if not config.history.enabled:
            print("History is disabled in the configuration.")
            return 0
        ensure_directories()
        try:
            entries = asyncio.run(load_history(config))
        except aiosqlite.Error as e:
            print(f"Error: could not read history: {e}", file=sys.stderr)
            return 1
        if not entries:
            print("No browsing history yet. Search with: navim <query>")
            return 0
        NavimApp(config, mode=Mode.HISTORY, entries=entries).run()
        return 0

    if query.lower() == "about":
        NavimApp(config, mode=Mode.ABOUT).run()
        return 0

    if not query:
        print(f"Usage: {__app_name__} <query>", file=sys.stderr)
        print(f"       {__app_name__} about       Show about information", file=sys.stderr)
        print(f"       {__app_name__} --history   Show browsing history", file=sys.stderr)
        print(f"Example: {__app_name__} rust programming", file=sys.stderr)
        return 2

    client = HttpClient(config.network, min_image_bytes=config.rendering.min_image_bytes)
    print(f"Searching for: {query}...")
    try:
        results = BraveSearch(client, config.search).search(query)
    except SearchError as e:
        client.close()
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not results:
        client.close()
        print("No results found.")
        return 0

    if config.history.enabled:
        ensure_directories()

    NavimApp(config, mode=Mode.SEARCH, query=query, results=results, client=client).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
