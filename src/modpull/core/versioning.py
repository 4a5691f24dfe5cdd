"""Ordering of game version strings.

Release and pre-release versions ("1.20.1", "1.19", "1.20-pre1") compare
with ``packaging``. Strings that are not valid PEP 440 versions, such as
snapshots ("23w13a") or legacy betas ("b1.7.3"), fall back to a natural sort
key and always order below any parseable version.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Iterable, Tuple, Union

from packaging.version import InvalidVersion, Version

_TOKEN_PATTERN = re.compile(r"(\d+)|([A-Za-z]+)")

_NaturalKey = Tuple[Tuple[int, Union[int, str]], ...]


def _natural_key(value: str) -> _NaturalKey:
    # Numbers sort before letters within the same position.
    key = []
    for number, word in _TOKEN_PATTERN.findall(value):
        if number:
            key.append((0, int(number)))
        else:
            key.append((1, word.lower()))
    return tuple(key)


@total_ordering
class GameVersion:
    """A comparable game version.

    Parseable versions compare by PEP 440 rules; anything else compares by
    its natural sort key and sorts below every parseable version.
    """

    __slots__ = ("raw", "_parsed", "_natural")

    def __init__(self, raw: str) -> None:
        self.raw = raw
        try:
            self._parsed = Version(raw)
        except InvalidVersion:
            self._parsed = None
        self._natural = _natural_key(raw)

    def _sort_key(self):
        if self._parsed is not None:
            return (1, self._parsed)
        return (0, self._natural)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: "GameVersion") -> bool:
        if not isinstance(other, GameVersion):
            return NotImplemented
        mine, theirs = self._sort_key(), other._sort_key()
        if mine[0] != theirs[0]:
            return mine[0] < theirs[0]
        return mine[1] < theirs[1]

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __repr__(self) -> str:
        return f"GameVersion({self.raw!r})"

    def __str__(self) -> str:
        return self.raw


def all_older_than(candidates: Iterable[str], target: str) -> bool:
    """Return True if every candidate is strictly older than ``target``.

    An empty iterable returns False: a version that declares no game
    versions says nothing about where the history stands.
    """
    parsed_target = GameVersion(target)
    seen = False
    for candidate in candidates:
        seen = True
        if not GameVersion(candidate) < parsed_target:
            return False
    return seen
