import pytest

from etl.aliases import AliasLedger


def test_add_increments_instead_of_duplicating():
    ledger = AliasLedger()
    ledger.add("Hades II")
    ledger.add(["Hades II", "Hades 2"])
    ledger.add("Hades 2", count=3)

    assert ledger.count("Hades II") == 2
    assert ledger.count("Hades 2") == 4
    assert len(ledger) == 2
    assert list(ledger) == ["Hades II", "Hades 2"]


def test_add_rejects_non_positive_count():
    with pytest.raises(ValueError):
        AliasLedger().add("Doom", count=0)


def test_top_alias():
    ledger = AliasLedger()
    assert ledger.top_alias() is None

    ledger.add("Doom")
    ledger.add("DOOM", count=2)
    assert ledger.top_alias() == "DOOM"


def test_top_alias_tie_goes_to_first_inserted():
    ledger = AliasLedger(["Dune", "Dune: Part Two"])
    assert ledger.top_alias() == "Dune"
    assert ledger.resolve() == "Dune"


def test_merge_is_additive():
    a = AliasLedger()
    a.add("x", 2)
    a.add("y")
    b = AliasLedger()
    b.add("y", 3)
    b.add("z")

    a.merge(b)

    assert a.count("x") == 2
    assert a.count("y") == 4
    assert a.count("z") == 1
    # the absorbed ledger is untouched
    assert b.items() == [("y", 3), ("z", 1)]


def test_normalise_orders_by_frequency_and_dedupes():
    ledger = AliasLedger()
    ledger.add("Foo")
    ledger.add("Bar", 2)
    ledger.add("Hades II")
    ledger.add("Hades 2")

    assert ledger.normalise() == ["bar", "foo", "hades 2"]


def test_compare_short_circuits_on_perfect_match():
    a = AliasLedger(["Hades II", "Totally Different"])
    b = AliasLedger(["Hades 2"])
    assert a.compare(b) == 1.0


def test_compare_is_mean_of_all_pairs():
    a = AliasLedger(["abc"])
    b = AliasLedger(["abd", "xyz"])
    # dice(abc, abd) = 0.5, dice(abc, xyz) = 0
    assert a.compare(b) == pytest.approx(0.25)


def test_compare_with_empty_ledger():
    assert AliasLedger(["Doom"]).compare(AliasLedger()) == 0.0


def test_iteration_is_restartable():
    ledger = AliasLedger(["a", "b"])
    assert list(ledger) == list(ledger) == ["a", "b"]
    assert "a" in ledger
    assert str(ledger) == "a"
