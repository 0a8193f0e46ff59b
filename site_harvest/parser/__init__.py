"""site_harvest.parser: HTML parsing and structured-content extraction."""

from site_harvest.parser.html_parser import element_text, find_main_region, normalize_text, parse_html
from site_harvest.parser.section_extractor import DEFAULT_PREDICATES, ElementPredicates, extract_sections

__all__ = [
    "DEFAULT_PREDICATES",
    "ElementPredicates",
    "element_text",
    "extract_sections",
    "find_main_region",
    "normalize_text",
    "parse_html",
]
