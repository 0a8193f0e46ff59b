"""
Header-delimited section extraction.

Every h1-h4 inside the main region opens a section. The section collects its
header's following element siblings up to the next header sibling: paragraphs
become :class:`Paragraph` blocks, lists become :class:`ListBlock` blocks, and
excluded elements (buttons, navigation, footers, links, scripts, styles,
images, vector graphics) are skipped without descending into them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from bs4.element import Tag

from site_harvest.crawler.models import ContentBlock, ListBlock, Page, Paragraph, Section
from site_harvest.parser.html_parser import element_text

__all__ = ("ElementPredicates", "DEFAULT_PREDICATES", "extract_sections")

ElementPredicate = Callable[[Tag], bool]

HEADER_TAGS = frozenset(("h1", "h2", "h3", "h4"))
PARAGRAPH_TAGS = frozenset(("p",))
LIST_TAGS = frozenset(("ul", "ol"))
LIST_ITEM_TAGS = frozenset(("li",))
EXCLUDED_TAGS = frozenset(("button", "nav", "footer", "a", "script", "style", "svg", "img"))


def _tag_in(names: frozenset[str]) -> ElementPredicate:
    def predicate(element: Tag) -> bool:
        return element.name in names

    return predicate


@dataclass(slots=True, frozen=True)
class ElementPredicates:
    """Element classification used by :func:`extract_sections`.

    The checks are independent: an element may satisfy several of them.
    """

    is_header: ElementPredicate = _tag_in(HEADER_TAGS)
    is_paragraph: ElementPredicate = _tag_in(PARAGRAPH_TAGS)
    is_list: ElementPredicate = _tag_in(LIST_TAGS)
    is_list_item: ElementPredicate = _tag_in(LIST_ITEM_TAGS)
    is_excluded: ElementPredicate = _tag_in(EXCLUDED_TAGS)


DEFAULT_PREDICATES = ElementPredicates()


def extract_sections(
    main_region: Optional[Tag],
    base_url: str,
    predicates: ElementPredicates = DEFAULT_PREDICATES,
) -> Page:
    """Build the :class:`Page` for *base_url* from its main content region.

    Never raises: a missing region or missing structure gives an empty title
    and no sections.
    """
    if main_region is None:
        return Page(url=base_url, title="")

    headers = main_region.find_all(predicates.is_header)
    title = element_text(headers[0]) if headers else ""

    siblings_by_parent: Dict[int, List[Tag]] = {}
    sections: List[Section] = []
    for header in headers:
        header_text = element_text(header)
        if not header_text:
            continue
        content = _collect_blocks(header, siblings_by_parent, predicates)
        if content:
            sections.append(Section(header=header_text, content=tuple(content)))

    return Page(url=base_url, title=title, sections=tuple(sections))


def _child_elements(parent: Tag, cache: Dict[int, List[Tag]]) -> List[Tag]:
    key = id(parent)
    if key not in cache:
        cache[key] = [child for child in parent.children if isinstance(child, Tag)]
    return cache[key]


def _collect_blocks(
    header: Tag,
    cache: Dict[int, List[Tag]],
    predicates: ElementPredicates,
) -> List[ContentBlock]:
    parent = header.parent
    if parent is None:
        return []
    siblings = _child_elements(parent, cache)
    start = next(i for i, element in enumerate(siblings) if element is header) + 1

    blocks: List[ContentBlock] = []
    for index in range(start, len(siblings)):
        sibling = siblings[index]
        if predicates.is_header(sibling):
            break
        if predicates.is_excluded(sibling):
            continue
        # not elif: one element may yield both a paragraph and a list
        if predicates.is_paragraph(sibling):
            text = element_text(sibling)
            if text:
                blocks.append(Paragraph(text))
        if predicates.is_list(sibling):
            items = tuple(
                text
                for text in (element_text(item) for item in sibling.find_all(predicates.is_list_item))
                if text
            )
            if items:
                blocks.append(ListBlock(items))
    return blocks
