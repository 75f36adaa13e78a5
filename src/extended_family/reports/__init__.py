"""Report generation for computed extended families."""

from extended_family.reports.summary import ExtendedFamilySummary, count_sentence

__all__ = ["ExtendedFamilySummary", "count_sentence"]
