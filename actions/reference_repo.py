from __future__ import annotations

from sqlalchemy import select

from cache_layer import REFERENCE_NAMESPACE, cache_get_or_load, cache_invalidate_prefix, make_cache_key, namespace_prefix
from marks.reference import ReferenceData
from models import CategoryMarks, District, Office


def _read_reference_data(db) -> ReferenceData:
    offices = db.execute(select(Office.name, Office.district)).all()
    districts = db.execute(select(District.name, District.category)).all()
    marks = db.execute(
        select(CategoryMarks.category, CategoryMarks.marks, CategoryMarks.type, CategoryMarks.gender)
    ).all()
    return ReferenceData.build(
        offices=[(r[0], r[1]) for r in offices],
        districts=[(r[0], r[1]) for r in districts],
        marks=[(r[0], r[1], r[2], r[3]) for r in marks],
    )


def load_reference_data(db) -> ReferenceData:
    """Office/district/category snapshot, memoized until the next district import."""
    return cache_get_or_load(make_cache_key(REFERENCE_NAMESPACE), lambda: _read_reference_data(db))


def invalidate_reference_data() -> int:
    return cache_invalidate_prefix(namespace_prefix(REFERENCE_NAMESPACE))
