import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional

_SEQUENCE_RE = re.compile(r"-(\d+)$")


def sequence_of(record_id: Optional[str]) -> Optional[int]:
    """Trailing sequence number of an id ("ORD-20240115-007" -> 7)."""
    match = _SEQUENCE_RE.search(record_id or "")
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class IdentifierFormat:
    prefix: str
    width: int = 3
    embed_date: bool = False

    def render(self, sequence: int, on: date) -> str:
        parts = [self.prefix]
        if self.embed_date:
            parts.append(on.strftime("%Y%m%d"))
        parts.append(str(sequence).zfill(self.width))
        return "-".join(parts)


class IdentifierGenerator:
    """
    Monotonic id source for one entity type.

    The counter only moves forward: deleting the newest record never frees
    its sequence number. Seeded ids are observed so new ids start above them.
    """

    def __init__(
        self,
        fmt: IdentifierFormat,
        clock: Callable[[], date] = date.today,
        start: int = 1,
    ):
        self.fmt = fmt
        self.clock = clock
        self._next = start

    @property
    def next_sequence(self) -> int:
        return self._next

    def observe(self, record_ids: Iterable[str]) -> None:
        for record_id in record_ids:
            seq = sequence_of(record_id)
            if seq is not None and seq >= self._next:
                self._next = seq + 1

    def next_id(self) -> str:
        record_id = self.fmt.render(self._next, self.clock())
        self._next += 1
        return record_id
