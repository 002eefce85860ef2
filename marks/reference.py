from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional


def normalize_key(value: Any) -> str:
    return " ".join(str(value or "").split()).upper()


@dataclass(frozen=True)
class ReferenceData:
    """
    Read-only snapshot of the office -> district -> category chain and the
    category marks table.

    Keys are normalized (trimmed, whitespace collapsed, upper-cased); values
    keep the spelling they were loaded with.
    """

    office_district: dict[str, str] = field(default_factory=dict)
    district_category: dict[str, str] = field(default_factory=dict)
    category_marks: dict[tuple[str, str, Optional[str]], float] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        offices: Iterable[tuple[str, str]] = (),
        districts: Iterable[tuple[str, str]] = (),
        marks: Iterable[tuple[str, float, str, Optional[str]]] = (),
    ) -> "ReferenceData":
        """
        offices: (office, district); districts: (district, category);
        marks: (category, marks, type, gender).
        """
        office_district = {normalize_key(o): str(d).strip() for o, d in offices if normalize_key(o)}
        district_category = {normalize_key(d): str(c).strip() for d, c in districts if normalize_key(d)}
        category_marks: dict[tuple[str, str, Optional[str]], float] = {}
        for category, value, era_type, gender in marks:
            key = (normalize_key(category), str(era_type or "").strip().lower(), _gender_key(gender))
            category_marks[key] = float(value)
        return cls(office_district, district_category, category_marks)

    def district_for(self, office: Any) -> Optional[str]:
        return self.office_district.get(normalize_key(office))

    def category_for_district(self, district: Any) -> Optional[str]:
        return self.district_category.get(normalize_key(district))

    def resolve(self, office: Any) -> tuple[Optional[str], Optional[str]]:
        """(district, category) of a work office; either may be ``None``."""
        district = self.district_for(office)
        if district is None:
            return None, None
        return district, self.category_for_district(district)

    def marks_for(self, category: Any, era_type: str, gender: Optional[str]) -> Optional[float]:
        if not normalize_key(category):
            return None
        return self.category_marks.get((normalize_key(category), era_type, _gender_key(gender)))

    def to_dict(self) -> dict:
        return {
            "offices": [{"name": k, "district": v} for k, v in sorted(self.office_district.items())],
            "districts": [{"name": k, "category": v} for k, v in sorted(self.district_category.items())],
            "categoryMarks": [
                {"category": c, "type": t, "gender": g, "marks": m}
                for (c, t, g), m in sorted(self.category_marks.items(), key=lambda kv: (kv[0][0], kv[0][1], kv[0][2] or ""))
            ],
        }


def _gender_key(gender: Any) -> Optional[str]:
    s = str(gender or "").strip().lower()
    return s or None
