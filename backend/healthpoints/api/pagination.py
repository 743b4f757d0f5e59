"""
Pagination des listes : paramètres page/size/sort et headers X-Total-Count / Link.
"""
import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, Tuple, TypeVar

from fastapi import Query
from starlette.datastructures import URL

from healthpoints.core.settings import get_settings

T = TypeVar("T")


@dataclass
class Pageable:
    """Demande de page (numéro 0-based, taille, tri)"""
    page: int = 0
    size: int = 20
    sort: List[Tuple[str, bool]] = field(default_factory=list)  # (propriété, descendant)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """Page de résultats"""
    content: List[T]
    number: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return math.ceil(self.total_elements / self.size)


def parse_sort(values: Optional[List[str]]) -> List[Tuple[str, bool]]:
    """Interprète `sort=prop,asc|desc` (répétable)"""
    orders = []
    for value in values or []:
        parts = [part.strip() for part in value.split(",") if part.strip()]
        if not parts:
            continue
        descending = False
        if parts[-1].lower() in ("asc", "desc"):
            descending = parts[-1].lower() == "desc"
            parts = parts[:-1]
        for prop in parts:
            orders.append((prop, descending))
    return orders


def get_pageable(
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    sort: Optional[List[str]] = Query(None),
) -> Pageable:
    """Dépendance FastAPI construisant le Pageable depuis la query string"""
    settings = get_settings()
    if size is None:
        size = settings.DEFAULT_PAGE_SIZE
    size = min(size, settings.MAX_PAGE_SIZE)
    return Pageable(page=page, size=size, sort=parse_sort(sort))


def _prepare_link(url: URL, page_number: int, page_size: int, rel: str) -> str:
    link = str(url.include_query_params(page=page_number, size=page_size))
    link = link.replace(",", "%2C").replace(";", "%3B")
    return f'<{link}>; rel="{rel}"'


def generate_pagination_headers(url: URL, page: Page) -> dict:
    """Headers de pagination attendus par le frontend"""
    links = []
    if page.number < page.total_pages - 1:
        links.append(_prepare_link(url, page.number + 1, page.size, "next"))
    if page.number > 0:
        links.append(_prepare_link(url, page.number - 1, page.size, "prev"))
    last_page = page.total_pages - 1 if page.total_pages > 0 else 0
    links.append(_prepare_link(url, last_page, page.size, "last"))
    links.append(_prepare_link(url, 0, page.size, "first"))
    return {
        "X-Total-Count": str(page.total_elements),
        "Link": ",".join(links),
    }
