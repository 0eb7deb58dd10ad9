"""
Shared pytest fixtures: provider records and fakes for the app's collaborators.
"""

from typing import Dict, List, Optional

import pytest

from imdb_tui.models import Work, WorkKind
from imdb_tui.services import OMDbError


@pytest.fixture
def dune() -> Work:
    return Work(
        identifier="tt1160419",
        title="Dune: Part One",
        year="2021",
        kind=WorkKind.MOVIE,
        rating="8.0",
        runtime="155 min",
        genre="Action, Adventure, Drama",
        director="Denis Villeneuve",
        actors="Timothée Chalamet, Rebecca Ferguson, Zendaya",
        plot="A noble family becomes embroiled in a war for control over the galaxy's most valuable asset.",
        awards="Won 6 Oscars",
    )


@pytest.fixture
def breaking_bad() -> Work:
    return Work(
        identifier="tt0903747",
        title="Breaking Bad",
        year="2008–2013",
        kind=WorkKind.SERIES,
        rating="9.5",
        runtime="49 min",
        season_count="5",
        genre="Crime, Drama, Thriller",
        director="N/A",
        actors="Bryan Cranston, Aaron Paul, Anna Gunn",
        plot="A chemistry teacher diagnosed with inoperable lung cancer turns to manufacturing methamphetamine.",
        awards="Won 16 Primetime Emmys",
    )


@pytest.fixture
def season_two() -> List[Work]:
    return [
        Work(
            identifier=f"tt1232{number:03d}",
            title=f"Episode {number}",
            kind=WorkKind.EPISODE,
            rating="8.5",
            episode=str(number),
            released=f"2009-03-{number:02d}",
        )
        for number in range(1, 14)
    ]


@pytest.fixture
def results(dune: Work, breaking_bad: Work) -> List[Work]:
    return [
        dune,
        breaking_bad,
        Work(identifier="tt0087182", title="Dune", year="1984", kind=WorkKind.MOVIE, rating="6.3"),
    ]


class FakeClient:
    """Stands in for OMDbClient; records every call and returns canned data."""

    def __init__(self, works: Optional[List[Work]] = None,
                 episodes: Optional[Dict[int, List[Work]]] = None,
                 details: Optional[Dict[str, Work]] = None,
                 search_error: Optional[str] = None):
        self.works = works or []
        self.episodes = episodes or {}
        self.details = details or {}
        self.search_error = search_error
        self.calls: List[tuple] = []

    def search_works(self, query, year=None):
        self.calls.append(("search_works", query, year))
        if self.search_error:
            raise OMDbError(self.search_error)
        return list(self.works)

    def fetch_details(self, identifier):
        self.calls.append(("fetch_details", identifier))
        if identifier not in self.details:
            raise OMDbError("Incorrect IMDb ID.")
        return self.details[identifier]

    def fetch_episodes(self, identifier, season):
        self.calls.append(("fetch_episodes", identifier, season))
        if season not in self.episodes:
            raise OMDbError("Series or season not found!")
        return list(self.episodes[season])

    def close(self):
        pass


class FakeLauncher:
    def __init__(self):
        self.opened: List[str] = []

    def open(self, url: str) -> None:
        self.opened.append(url)


@pytest.fixture
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def make_client():
    """Factory for FakeClient instances."""
    return FakeClient
