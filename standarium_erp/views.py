"""
views.py: which pages depend on which collections, and their versions.

The sync gateway calls ``invalidate(collection)`` after each snapshot. Only
the pages reading that collection get a new version; the browser's refresh
tick compares versions and redraws the current page only when its own
version moved.
"""

from __future__ import annotations

PAGES = {
    "/": "dashboard",
    "/inventory": "inventory",
    "/services": "services",
    "/reports": "reports",
    "/build": "checklist",
    "/assistant": "assistant",
}

VIEW_DEPENDENCIES = {
    "products": ("dashboard", "inventory", "reports"),
    "sales": ("dashboard",),
    "services": ("services",),
    "components": ("checklist",),
}


def page_for_path(pathname) -> str:
    return PAGES.get(pathname or "/", "not-found")


class ViewRegistry:
    def __init__(self):
        self._versions = {page: 0 for page in PAGES.values()}

    def invalidate(self, collection: str) -> tuple:
        pages = VIEW_DEPENDENCIES.get(collection, ())
        for page in pages:
            self._versions[page] += 1
        return pages

    def invalidate_all(self) -> None:
        for page in self._versions:
            self._versions[page] += 1

    def version(self, page: str) -> int:
        return self._versions.get(page, 0)
