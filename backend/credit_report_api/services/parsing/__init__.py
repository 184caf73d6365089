"""Credit Report API - Parsing Layer

Raw bureau XML → generic tree → NormalizedReport.
Storage and display only ever see NormalizedReport.
"""
from .path_resolver import resolve, first_child, children
from .report_normalizer import normalize
from .xml_tree import parse_xml, ReportParseError

__all__ = ["resolve", "first_child", "children", "normalize", "parse_xml", "ReportParseError"]
