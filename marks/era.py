from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from marks.bs_date import BSDate, parse_bs

# Last day scored under the old geographical marks scheme.
POLICY_CUTOFF = BSDate(2079, 3, 32)

OLD = "old"
NEW = "new"


@dataclass(frozen=True)
class EraSplit:
    old_part: Optional[tuple[BSDate, BSDate]] = None
    new_part: Optional[tuple[BSDate, BSDate]] = None

    @property
    def entirely_old(self) -> bool:
        return self.old_part is not None and self.new_part is None

    @property
    def entirely_new(self) -> bool:
        return self.new_part is not None and self.old_part is None

    def parts(self) -> list[tuple[str, BSDate, BSDate]]:
        out = []
        if self.old_part:
            out.append((OLD, *self.old_part))
        if self.new_part:
            out.append((NEW, *self.new_part))
        return out


def era_of(day: BSDate, cutoff: BSDate = POLICY_CUTOFF) -> str:
    return OLD if day <= cutoff else NEW


def split_at_cutoff(start: Any, end: Any, cutoff: BSDate = POLICY_CUTOFF) -> Optional[EraSplit]:
    """
    Split inclusive ``[start, end]`` around ``cutoff``.

    The cutoff day belongs to the old side. Returns ``None`` for invalid or
    reversed intervals.
    """
    s = parse_bs(start)
    e = parse_bs(end)
    if s is None or e is None or e < s:
        return None
    if e <= cutoff:
        return EraSplit(old_part=(s, e))
    if s > cutoff:
        return EraSplit(new_part=(s, e))
    return EraSplit(old_part=(s, cutoff), new_part=(cutoff.day_after(), e))
