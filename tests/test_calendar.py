import itertools
from datetime import date

import pytest

from etl.platforms import default_catalog
from etl.release_calendar import MONTH_NAMES, ReleaseCalendar
from etl.video_game import VideoGame

CATALOG = default_catalog()
PS5 = CATALOG.resolve_by_name("PS5")
PC = CATALOG.resolve_by_name("PC")


def _game(ids, name, *releases):
    game = VideoGame(next(ids), name)
    for platform, release_date in releases:
        game.add_release_date(platform, release_date)
    return game


def test_same_day_entries_sorted_by_name():
    ids = itertools.count()
    day = date(2024, 5, 10)
    games = [_game(ids, name, (PS5, day)) for name in ("B-Game", "A-Game", "C-Game")]

    calendar = ReleaseCalendar.from_games(games, CATALOG)

    assert [e["name"] for e in calendar.month(4)] == ["A-Game", "B-Game", "C-Game"]


def test_accented_names_sort_with_their_base_letter():
    ids = itertools.count()
    day = date(2024, 5, 10)
    games = [_game(ids, name, (PS5, day)) for name in ("Zeta", "Édith", "alpha")]

    calendar = ReleaseCalendar.from_games(games, CATALOG)

    assert [e["name"] for e in calendar.month(4)] == ["alpha", "Édith", "Zeta"]


def test_entries_sorted_by_date_first():
    ids = itertools.count()
    games = [
        _game(ids, "Alpha", (PS5, date(2024, 3, 20))),
        _game(ids, "Zeta", (PS5, date(2024, 3, 1))),
        _game(ids, "beta", (PS5, date(2024, 3, 20))),
    ]
    calendar = ReleaseCalendar.from_games(games, CATALOG)

    assert [(e["releaseDate"], e["name"]) for e in calendar.month(2)] == [
        ("2024-03-01", "Zeta"),
        ("2024-03-20", "Alpha"),
        ("2024-03-20", "beta"),
    ]


def test_entry_shape_and_platform_order():
    ids = itertools.count()
    game = _game(ids, "Hades II", (PC, date(2024, 9, 25)), (PS5, date(2024, 9, 25)))
    game.add_developer("Supergiant Games")
    game.add_score("metacritic", 95)

    (entry,) = ReleaseCalendar.from_games([game], CATALOG).month(8)

    assert entry == {
        "name": "Hades II",
        "developer": "Supergiant Games",
        "publisher": None,
        "platforms": [
            {"name": "Playstation 5", "shortName": "PS5"},
            {"name": "Microsoft Windows", "shortName": "Win"},
        ],
        "releaseDate": "2024-09-25",
        "scores": [{"label": "Metacritic", "value": 95.0}],
    }


def test_game_split_across_months():
    ids = itertools.count()
    game = _game(ids, "Astro Bot", (PS5, date(2024, 9, 6)), (PC, date(2025, 1, 15)))
    calendar = ReleaseCalendar.from_games([game], CATALOG)

    assert len(calendar) == 2
    assert len(calendar.month(8)) == 1
    assert len(calendar.month(0)) == 1


def test_games_without_dates_are_skipped():
    calendar = ReleaseCalendar.from_games([VideoGame(0, "Silksong")], CATALOG)
    assert len(calendar) == 0


def test_unknown_platform_id_fails_loudly():
    game = VideoGame(0, "Mystery")
    game.add_release_date(999, date(2024, 1, 1))
    with pytest.raises(KeyError):
        ReleaseCalendar.from_games([game], CATALOG)


def test_month_index_out_of_range():
    calendar = ReleaseCalendar(CATALOG)
    with pytest.raises(IndexError):
        calendar.to_month_json(12)
    with pytest.raises(IndexError):
        calendar.to_month_json(-1)


def test_month_and_year_projections_agree():
    ids = itertools.count()
    games = [_game(ids, name, (PS5, date(2024, 6, 1))) for name in ("Gamma", "Alpha", "Beta")]
    calendar = ReleaseCalendar.from_games(games, CATALOG)

    year = calendar.to_json()
    assert [m["name"] for m in year["months"]] == MONTH_NAMES
    assert year["months"][5] == calendar.to_month_json(5)
    assert calendar.to_month_json(5)["index"] == 5


def test_month_returns_copies():
    ids = itertools.count()
    calendar = ReleaseCalendar.from_games([_game(ids, "Alpha", (PS5, date(2024, 6, 1)))], CATALOG)
    calendar.month(5)[0]["platforms"].clear()
    assert calendar.month(5)[0]["platforms"] == [{"name": "Playstation 5", "shortName": "PS5"}]


def test_day_sections():
    ids = itertools.count()
    games = [
        _game(ids, "Alpha", (PS5, date(2024, 6, 1))),
        _game(ids, "Beta", (PS5, date(2024, 6, 1))),
        _game(ids, "Gamma", (PS5, date(2024, 6, 14))),
    ]
    sections = ReleaseCalendar.from_games(games, CATALOG).days(5)

    assert [(day, [e["name"] for e in entries]) for day, entries in sections] == [
        (date(2024, 6, 1), ["Alpha", "Beta"]),
        (date(2024, 6, 14), ["Gamma"]),
    ]
