"""
Tests for the row projections and detail formatting.
"""

from rich.text import Text

from imdb_tui.models import Work, WorkKind
from imdb_tui.rows import (DEFAULT_PALETTE, PLAIN_PALETTE, TITLE_PADDING,
                           episodes_table, format_details, options_table,
                           results_table, seasons_table)


class TestResultsTable:
    def test_column_order(self, results):
        view = results_table(results)
        assert view.labels() == ("Title", "Year", "Rating", "Type", "Length", "Seasons", "Link")

    def test_title_width_follows_longest_title(self, results):
        view = results_table(results)
        assert view.columns[0].width == len("Dune: Part One") + TITLE_PADDING

    def test_row_cells(self, breaking_bad):
        view = results_table([breaking_bad], PLAIN_PALETTE)
        assert [str(cell) for cell in view.rows[0].cells] == [
            "Breaking Bad", "2008–2013", "9.5", "Series", "49 min", "5",
            "https://www.imdb.com/title/tt0903747",
        ]

    def test_type_label_is_title_cased_for_display_only(self, dune):
        view = results_table([dune])
        assert view.rows[0].cells[3] == "Movie"
        assert view.rows[0].work.kind is WorkKind.MOVIE

    def test_rows_carry_their_work(self, results):
        view = results_table(results)
        assert [row.work for row in view.rows] == results
        assert [row.key for row in view.rows] == [work.identifier for work in results]

    def test_palette_styles_cells(self, dune):
        cell = results_table([dune], DEFAULT_PALETTE).rows[0].cells[0]
        assert isinstance(cell, Text)
        assert cell.style == DEFAULT_PALETTE.title

    def test_empty_list(self):
        view = results_table([])
        assert len(view) == 0
        assert view.columns[0].width == TITLE_PADDING


class TestFixedTables:
    def test_options(self):
        view = options_table()
        assert view.labels() == ("Options",)
        assert [row.key for row in view.rows] == ["Find Episode", "Browse"]

    def test_seasons(self):
        view = seasons_table(3)
        assert view.labels() == ("Select Season",)
        assert [row.cells for row in view.rows] == [("1",), ("2",), ("3",)]


class TestEpisodesTable:
    def test_columns_and_order(self, season_two):
        view = episodes_table(season_two, PLAIN_PALETTE)
        assert view.labels() == ("Episode", "Title", "Rating", "Released", "Link")
        assert [row.work for row in view.rows] == season_two

    def test_row_cells(self):
        episode = Work(identifier="tt1232248", title="Grilled", kind=WorkKind.EPISODE,
                       rating="8.7", episode="2", released="2009-03-15")
        view = episodes_table([episode], PLAIN_PALETTE)
        assert [str(cell) for cell in view.rows[0].cells] == [
            "2", "Grilled", "8.7", "2009-03-15", "https://www.imdb.com/title/tt1232248",
        ]
        assert view.columns[1].width == len("Grilled") + TITLE_PADDING


def test_format_details(dune):
    assert format_details(dune) == (
        "Title: Dune: Part One\n"
        "Year: 2021\n"
        "Rating: 8.0\n"
        "Genre: Action, Adventure, Drama\n"
        "Director: Denis Villeneuve\n"
        "Actors: Timothée Chalamet, Rebecca Ferguson, Zendaya\n"
        "Plot: A noble family becomes embroiled in a war for control over the galaxy's most valuable asset.\n"
        "Awards: Won 6 Oscars"
    )
