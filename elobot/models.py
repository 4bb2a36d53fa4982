from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


NO_RATINGS_MESSAGE = "Player is either invalid or has no ELOs"


class TimeControl(str, Enum):
    LENTE = "Lente"
    SEMI_RAPIDE = "Semi-rapide"
    RAPIDE = "Rapide"

    @property
    def code(self) -> int:
        """Numeric code used by the FQE rating endpoint (c=1|2|3)."""
        return list(TimeControl).index(self) + 1


@dataclass
class SearchQuery:
    first_name: str = ""
    last_name: str = ""
    member_id: Optional[int] = None

    @property
    def has_name(self) -> bool:
        return bool(self.first_name or self.last_name)

    @property
    def is_empty(self) -> bool:
        return not self.has_name and not self.member_id


@dataclass(frozen=True)
class PlayerSearchResult:
    """One row of the FQE member search."""
    name: str
    member_id: int


@dataclass(frozen=True)
class RatingEntry:
    date: str       # "Quand"
    value: int      # "Cote"


@dataclass
class Player:
    """
    Rating history of one FQE member, keyed by time control.

    A missing key means the federation returned no usable data for that
    time control; an empty list means the member has no rating there yet.
    Entries are oldest-first, so the current rating is the last one.
    """
    member_id: int
    ratings: dict[TimeControl, list[RatingEntry]] = field(default_factory=dict)

    def current_rating(self, time_control: TimeControl) -> Optional[RatingEntry]:
        entries = self.ratings.get(time_control)
        if not entries:
            return None
        return entries[-1]

    @property
    def summary(self) -> str:
        if not self.ratings:
            return NO_RATINGS_MESSAGE

        lines = []
        for tc in TimeControl:
            if tc not in self.ratings:
                continue
            current = self.current_rating(tc)
            if current is None:
                lines.append(f"{tc.value}: ?")
            else:
                lines.append(f"{tc.value}: {current.value} ({current.date})")
        return "\n".join(lines)
