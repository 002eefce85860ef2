from marks.bs_date import BSDate, YMD, diff_days, diff_ymd, format_bs, is_valid_bs, parse_bs, span_days, span_ymd
from marks.era import POLICY_CUTOFF, split_at_cutoff
from marks.excel_dates import normalize_excel_date
from marks.partition import Break, Span, collect_breaks, partition_interval
from marks.reference import ReferenceData
from marks.timeline import Segment, build_timeline
from marks.seniority import build_seniority_timeline

__all__ = [
    "BSDate",
    "YMD",
    "Break",
    "POLICY_CUTOFF",
    "ReferenceData",
    "Segment",
    "Span",
    "build_seniority_timeline",
    "build_timeline",
    "collect_breaks",
    "diff_days",
    "diff_ymd",
    "format_bs",
    "is_valid_bs",
    "normalize_excel_date",
    "parse_bs",
    "partition_interval",
    "span_days",
    "span_ymd",
    "split_at_cutoff",
]
