# rows.py
"""Pure projections from Work records to the tables shown for each screen."""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from rich.text import Text

from .models import Work

TITLE_PADDING = 10

OPTION_FIND_EPISODE = "Find Episode"
OPTION_BROWSE = "Browse"
SERIES_OPTIONS = (OPTION_FIND_EPISODE, OPTION_BROWSE)

Cell = Union[str, Text]


@dataclass(frozen=True)
class Palette:
    """Rich styles used to colour table cells and the detail panel."""
    title: str = "cyan"
    year: str = "green"
    rating: str = "bright_blue"
    info: str = "yellow"
    hint: str = "bold bright_black"

    def paint(self, value: str, style: str) -> Text:
        return Text(value, style=style)


DEFAULT_PALETTE = Palette()
PLAIN_PALETTE = Palette(title="", year="", rating="", info="", hint="")


@dataclass(frozen=True)
class Column:
    label: str
    width: int


@dataclass(frozen=True)
class Row:
    """One table row; `work` is the record the row was built from, if any."""
    key: str
    cells: Tuple[Cell, ...]
    work: Optional[Work] = None


@dataclass(frozen=True)
class TableView:
    columns: Tuple[Column, ...] = ()
    rows: Tuple[Row, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def labels(self) -> Tuple[str, ...]:
        return tuple(column.label for column in self.columns)


def _title_width(works: Sequence[Work]) -> int:
    return max((len(work.title) for work in works), default=0) + TITLE_PADDING


def _link_width(works: Sequence[Work]) -> int:
    return max((len(work.url) for work in works), default=len("Link"))


def results_table(works: Sequence[Work], palette: Palette = DEFAULT_PALETTE) -> TableView:
    columns = (
        Column("Title", _title_width(works)),
        Column("Year", 16),
        Column("Rating", 12),
        Column("Type", 10),
        Column("Length", 10),
        Column("Seasons", 10),
        Column("Link", _link_width(works)),
    )
    rows = tuple(
        Row(
            key=work.identifier,
            cells=(
                palette.paint(work.title, palette.title),
                palette.paint(work.year, palette.year),
                palette.paint(work.rating, palette.rating),
                work.kind.value.title(),
                work.runtime,
                work.season_count,
                work.url,
            ),
            work=work,
        )
        for work in works
    )
    return TableView(columns, rows)


def options_table() -> TableView:
    rows = tuple(Row(key=option, cells=(option,)) for option in SERIES_OPTIONS)
    return TableView((Column("Options", 20),), rows)


def seasons_table(count: int) -> TableView:
    rows = tuple(Row(key=str(number), cells=(str(number),)) for number in range(1, count + 1))
    return TableView((Column("Select Season", 16),), rows)


def episodes_table(episodes: Sequence[Work], palette: Palette = DEFAULT_PALETTE) -> TableView:
    columns = (
        Column("Episode", 10),
        Column("Title", _title_width(episodes)),
        Column("Rating", 12),
        Column("Released", 20),
        Column("Link", _link_width(episodes)),
    )
    rows = tuple(
        Row(
            key=episode.identifier,
            cells=(
                episode.episode,
                palette.paint(episode.title, palette.title),
                palette.paint(episode.rating, palette.rating),
                palette.paint(episode.released, palette.year),
                episode.url,
            ),
            work=episode,
        )
        for episode in episodes
    )
    return TableView(columns, rows)


def format_details(work: Work) -> str:
    """Formats the text shown in the detail panel."""
    return "\n".join([
        f"Title: {work.title}",
        f"Year: {work.year}",
        f"Rating: {work.rating}",
        f"Genre: {work.genre}",
        f"Director: {work.director}",
        f"Actors: {work.actors}",
        f"Plot: {work.plot}",
        f"Awards: {work.awards}",
    ])
