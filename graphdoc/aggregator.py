"""
Result aggregation.

Merges what every plugin contributed to one page into the ordered lists
the renderer consumes. Merging is plain concatenation in plugin
registration order, each plugin's own ordering kept, so the same inputs
always produce the same page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .plugins.base import NavigationSection
from .type_refs import page_filename

logger = logging.getLogger(__name__)


@dataclass
class PluginContribution:
    """What one plugin returned for one page. Failed calls leave their list empty."""
    plugin_name: str
    navigations: list[Any] = field(default_factory=list)
    documents: list[Any] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)


@dataclass
class PageResult:
    """Merged plugin output for one page."""
    build_for_type: Optional[str]
    headers: list[str] = field(default_factory=list)
    navigations: list[Any] = field(default_factory=list)
    documents: list[Any] = field(default_factory=list)

    @property
    def is_index(self) -> bool:
        return self.build_for_type is None

    @property
    def filename(self) -> str:
        return page_filename(self.build_for_type)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict for template engines."""
        return {
            "build_for_type": self.build_for_type,
            "filename": self.filename,
            "headers": list(self.headers),
            "navigations": [
                {
                    "title": section.title,
                    "items": [
                        {"text": item.text, "href": item.href, "is_active": item.is_active}
                        for item in section.items
                    ],
                }
                for section in self.navigations
            ],
            "documents": [
                {"title": section.title, "description": section.description}
                for section in self.documents
            ],
        }


def merge_navigation_sections(
    sections: Sequence[Any],
    dedupe_by_title: bool = False,
) -> list[Any]:
    """
    Merge navigation sections.

    By default sections are kept as they come. With `dedupe_by_title`,
    sections sharing a title are folded into the first one: its items are
    followed by the items of the later sections, in order.
    """
    if not dedupe_by_title:
        return list(sections)

    merged: list[Any] = []
    by_title: dict[str, NavigationSection] = {}
    for section in sections:
        existing = by_title.get(section.title)
        if existing is None:
            folded = NavigationSection(section.title, list(section.items))
            by_title[section.title] = folded
            merged.append(folded)
        else:
            existing.items.extend(section.items)
    return merged


def aggregate_page(
    build_for_type: Optional[str],
    contributions: Sequence[PluginContribution],
    dedupe_navigations: bool = False,
) -> PageResult:
    """
    Merge the contributions of all plugins for one page.

    Args:
        build_for_type: The page's type name, None for the index
        contributions: One entry per plugin, in registration order
        dedupe_navigations: Fold navigation sections with the same title

    Returns:
        The merged PageResult
    """
    page = PageResult(build_for_type=build_for_type)
    navigations = []
    for contribution in contributions:
        navigations.extend(contribution.navigations)
        page.documents.extend(contribution.documents)
        page.headers.extend(contribution.headers)
    page.navigations = merge_navigation_sections(navigations, dedupe_by_title=dedupe_navigations)

    logger.debug(
        f"Merged page {page.filename}: {len(page.navigations)} navigation sections, "
        f"{len(page.documents)} document sections, {len(page.headers)} headers"
    )
    return page


def merge_assets(per_plugin: Sequence[Sequence[str]]) -> list[str]:
    """Concatenate asset paths in plugin order."""
    assets: list[str] = []
    for paths in per_plugin:
        assets.extend(paths)
    return assets
