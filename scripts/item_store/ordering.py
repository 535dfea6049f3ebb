"""Ordering policy for Products: price ascending, then name by code point."""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .records import Product


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_products(a: Product | None, b: Product | None) -> int:
    """Three-way compare two Products.

    A missing counterpart sorts first. Names compare ordinally, so ``"Z"``
    sorts before ``"a"``.
    """
    if a is None or b is None:
        return _cmp(a is not None, b is not None)
    by_price = _cmp(a.price, b.price)
    if by_price:
        return by_price
    return _cmp(a.name, b.name)


product_sort_key = cmp_to_key(compare_products)


def sort_products(products: Iterable[Product | None]) -> list[Product | None]:
    """Stable sort by ``compare_products``; ``None`` entries come first."""
    return sorted(products, key=product_sort_key)
