"""
Candidate Minimizers

A candidate is a small box that the search could not rule out as
containing a global minimizer, together with the enclosure of the
objective over it. Candidates are kept ordered by lower bound so that
discarding everything above a new upper bound is a truncation.
"""

import bisect
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from ..bounds.interval import Box


@dataclass(frozen=True)
class Minimizer:
    """
    A box that may contain a global minimizer.

    Attributes:
        box: The surviving box
        lower_bound: Lower end of the objective enclosure over the box
        upper_bound: Upper end of the objective enclosure over the box
    """
    box: Box
    lower_bound: float
    upper_bound: float

    def __lt__(self, other: 'Minimizer') -> bool:
        return self.lower_bound < other.lower_bound

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "box": self.box.to_canonical(),
            "lower_bound": self.lower_bound,
            "upper_bound": self.upper_bound,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Minimizer':
        return cls(
            box=Box.from_canonical(data["box"]),
            lower_bound=data["lower_bound"],
            upper_bound=data["upper_bound"],
        )

    def __str__(self) -> str:
        x, y = self.box.x, self.box.y
        return (
            f"x in [{x.lo:.16g}, {x.hi:.16g}], y in [{y.lo:.16g}, {y.hi:.16g}]"
            f" : f in [{self.lower_bound:.16g}, {self.upper_bound:.16g}]"
        )


@dataclass
class CandidateSet:
    """
    Collection of minimizer records ordered by lower bound.

    Records with equal lower bounds keep their insertion order.
    """
    _records: List[Minimizer] = field(default_factory=list)
    _keys: List[float] = field(default_factory=list)

    def __post_init__(self):
        if self._records and not self._keys:
            records = sorted(self._records, key=lambda m: m.lower_bound)
            self._records = records
            self._keys = [m.lower_bound for m in records]

    @classmethod
    def from_records(cls, records: Iterable[Minimizer]) -> 'CandidateSet':
        candidates = cls()
        candidates.merge(records)
        return candidates

    def insert(self, record: Minimizer) -> None:
        """Insert a record after any record with the same lower bound."""
        pos = bisect.bisect_right(self._keys, record.lower_bound)
        self._keys.insert(pos, record.lower_bound)
        self._records.insert(pos, record)

    def merge(self, records: Iterable[Minimizer]) -> None:
        for record in records:
            self.insert(record)

    def discard_above(self, bound: float) -> int:
        """
        Remove every record whose lower bound exceeds ``bound``.

        Returns:
            Number of records removed
        """
        pos = bisect.bisect_right(self._keys, bound)
        removed = len(self._records) - pos
        if removed:
            del self._keys[pos:]
            del self._records[pos:]
        return removed

    def best(self) -> Optional[Minimizer]:
        """Record with the smallest lower bound (None when empty)."""
        return self._records[0] if self._records else None

    def records(self) -> List[Minimizer]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()
        self._keys.clear()

    def __iter__(self) -> Iterator[Minimizer]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def to_canonical(self) -> List[Dict[str, Any]]:
        return [m.to_canonical() for m in self._records]
