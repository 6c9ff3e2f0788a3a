"""Weighted alias ledgers.

Every scraped attribute that may be spelled differently by different sources
(game title, developer, publisher, release date per platform) is stored as an
:class:`AliasLedger` – a multiset of observed strings.  The ledger answers two
questions:

1. *What is the most likely true value?* – :meth:`AliasLedger.top_alias`
2. *How similar is this ledger to another one?* – :meth:`AliasLedger.compare`
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .utils import dice_coefficient, normalize_alias


class AliasLedger:
    """Multiset of observed string variants with occurrence counts."""

    def __init__(self, names: Union[str, Iterable[str], None] = None) -> None:
        # dicts keep insertion order, which doubles as the tie-break order
        self._counts: Dict[str, int] = {}
        if names is not None:
            self.add(names)

    def add(self, names: Union[str, Iterable[str]], count: int = 1) -> None:
        """Record *count* more observations of each name in *names*."""

        if count < 1:
            raise ValueError(f"alias count must be >= 1, got {count}")
        if isinstance(names, str):
            names = [names]
        for name in names:
            self._counts[name] = self._counts.get(name, 0) + count

    def merge(self, other: "AliasLedger") -> None:
        """Absorb *other*'s observations; counts are summed, never overwritten."""

        for name, count in other.items():
            self.add(name, count)

    def count(self, name: str) -> int:
        return self._counts.get(name, 0)

    def items(self) -> List[Tuple[str, int]]:
        return list(self._counts.items())

    def top_alias(self) -> Optional[str]:
        """Return the alias with the highest count (``None`` when empty).

        Ties go to the alias that was added first.
        """

        top: Optional[str] = None
        top_count = 0
        for name, count in self._counts.items():
            if count > top_count:
                top, top_count = name, count
        return top

    def resolve(self) -> Optional[str]:
        """Resolved ("most likely true") value of the ledger.

        The first observed alias keeps winning until a challenger has been seen
        more often than it, so one stray spelling from a single source cannot
        replace a name unless it is repeated.
        """

        return self.top_alias()

    def normalise(self) -> List[str]:
        """Distinct normalised aliases, most frequently observed first."""

        ordered = sorted(self._counts.items(), key=lambda item: item[1], reverse=True)
        seen: Dict[str, None] = {}
        for name, _ in ordered:
            seen.setdefault(normalize_alias(name), None)
        return list(seen)

    def compare(self, other: "AliasLedger") -> float:
        """Similarity of two ledgers in ``[0, 1]``.

        Every normalised alias is scored against every alias of *other*.  A
        single perfect pair returns ``1.0`` immediately; otherwise the mean of
        all pairs is returned, so a ledger full of unrelated alternates scores
        lower than one whose names consistently agree.
        """

        ours = self.normalise()
        theirs = other.normalise()
        if not ours or not theirs:
            return 0.0

        coefficients: List[float] = []
        for a in ours:
            for b in theirs:
                coefficient = dice_coefficient(a, b)
                if coefficient == 1:
                    return 1.0
                coefficients.append(coefficient)
        return sum(coefficients) / len(coefficients)

    def __contains__(self, name: object) -> bool:
        return name in self._counts

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._counts))

    def __len__(self) -> int:
        return len(self._counts)

    def __bool__(self) -> bool:
        return bool(self._counts)

    def __repr__(self) -> str:
        return f"AliasLedger({self._counts!r})"

    def __str__(self) -> str:
        return self.top_alias() or ""


__all__ = ["AliasLedger"]
