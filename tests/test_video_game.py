from datetime import date, datetime

import pytest

from etl.platforms import default_catalog
from etl.video_game import VideoGame

CATALOG = default_catalog()
PS5 = CATALOG.resolve_by_name("PS5")
XBOX = CATALOG.resolve_by_name("XSX")
PC = CATALOG.resolve_by_name("PC")


def test_resolved_name_needs_repetition_to_change():
    game = VideoGame(0, "Dune")
    game.add_alias("Dune: Part Two")
    assert game.name == "Dune"

    game.add_alias("Dune: Part Two")
    assert game.name == "Dune: Part Two"


def test_developer_and_publisher():
    game = VideoGame(0, "Astro Bot")
    assert game.developer is None
    game.add_developer("Team Asobi")
    game.add_publisher(["Sony Interactive Entertainment", "SIE"])
    assert game.developer == "Team Asobi"
    assert game.publisher == "Sony Interactive Entertainment"


def test_add_release_date_accepts_dates_and_strings():
    game = VideoGame(0, "Hades II")
    game.add_release_date(PC, date(2024, 9, 25))
    game.add_release_date(PC, datetime(2024, 9, 25, 17, 30))
    game.add_release_date(PC.id, "2024-09-26")

    assert game.release_date_votes(PC) == {"2024-09-25": 2, "2024-09-26": 1}
    assert game.release_dates == {PC.id: date(2024, 9, 25)}


def test_add_release_date_rejects_bad_input():
    game = VideoGame(0, "Hades II")
    with pytest.raises(TypeError):
        game.add_release_date("PS5", date(2024, 9, 25))
    with pytest.raises(TypeError):
        game.add_release_date(PS5, 20240925)


def test_merge_preserves_counts_and_leaves_other_untouched():
    a = VideoGame(0, "Hades II")
    a.add_release_date(PC, date(2024, 9, 25))
    b = VideoGame(1, "Hades 2")
    b.add_release_date(PC, date(2024, 9, 25))
    b.add_developer("Supergiant Games")

    a.merge(b)

    assert a.aliases == ["Hades II", "Hades 2"]
    assert a.release_date_votes(PC) == {"2024-09-25": 2}
    assert a.developer == "Supergiant Games"
    assert b.aliases == ["Hades 2"]
    assert b.release_date_votes(PC) == {"2024-09-25": 1}


def test_merge_twice_double_counts():
    a = VideoGame(0, "Doom")
    b = VideoGame(1, "DOOM")
    a.merge(b)
    a.merge(b)
    assert a.name == "DOOM"


def test_compare_only_uses_names():
    a = VideoGame(0, "Minecraft")
    a.add_developer("Mojang")
    b = VideoGame(1, "Terraria")
    b.add_developer("Mojang")
    assert a.compare(b) < 0.85


def test_calendar_entries_one_per_platform_date():
    a = VideoGame(0, "Astro Bot")
    a.add_release_date(PS5, date(2024, 9, 6))
    b = VideoGame(1, "Astro Bot")
    b.add_release_date(XBOX, date(2024, 10, 1))
    a.merge(b)

    entries = a.to_calendar_entries()
    assert [(e["release_date"], e["platform_ids"]) for e in entries] == [
        (date(2024, 9, 6), [PS5.id]),
        (date(2024, 10, 1), [XBOX.id]),
    ]


def test_calendar_entries_group_shared_dates():
    game = VideoGame(0, "Astro Bot")
    game.add_release_date(PS5, date(2024, 9, 6))
    game.add_release_date(XBOX, date(2024, 9, 6))

    entries = game.to_calendar_entries()
    assert len(entries) == 1
    assert sorted(entries[0]["platform_ids"]) == sorted([PS5.id, XBOX.id])
    assert entries[0]["name"] == "Astro Bot"


def test_game_without_dates_has_no_entries():
    assert VideoGame(0, "Silksong").to_calendar_entries() == []


def test_scores_survive_merge():
    a = VideoGame(0, "Astro Bot")
    a.add_score("metacritic", 94)
    b = VideoGame(1, "Astro Bot")
    b.add_score("metacritic", 96)
    b.add_score("user", 9.0)

    a.merge(b)

    assert a.scores == {"metacritic": 95.0, "user": 9.0}
