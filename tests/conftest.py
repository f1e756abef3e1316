"""
Pytest configuration and fixtures for OrderPilot tests.

Provides a small catalog domain (categories, products, reviews) and
helper factories. The domain lives here only: the library knows nothing
about it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import pytest

from orderpilot import (
    CompositeOrdering,
    Ordering,
    Predicate,
    adapt,
    combine_orderings,
    field_getter,
    natural,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PACKS_DIR = FIXTURES_DIR / "packs"


# =============================================================================
# Test Domain
# =============================================================================

@dataclass(frozen=True)
class Category:
    name: str


@dataclass(frozen=True)
class Product:
    name: str
    category: Optional[Category]
    price: int = 0
    unavailable: bool = False
    tags: tuple[str, ...] = ()

    def __repr__(self) -> str:
        category = self.category.name if self.category else None
        flag = ", unavailable" if self.unavailable else ""
        return f"{self.name}({category}{flag})"


@dataclass(frozen=True)
class Review:
    product: Product
    stars: int
    author: str = "anon"
    metadata: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)


# =============================================================================
# Factory Helpers
# =============================================================================

def make_category(name: str = "Tools") -> Category:
    """Create a Category."""
    return Category(name=name)


def make_product(
    name: str,
    category: Optional[str] = "Tools",
    price: int = 0,
    unavailable: bool = False,
    tags: tuple[str, ...] = (),
) -> Product:
    """Create a Product; category is given by name (None for no category)."""
    return Product(
        name=name,
        category=make_category(category) if category is not None else None,
        price=price,
        unavailable=unavailable,
        tags=tags,
    )


def make_review(
    product: Product,
    stars: int,
    author: str = "anon",
    metadata: Optional[dict] = None,
) -> Review:
    """Create a Review."""
    return Review(product=product, stars=stars, author=author, metadata=metadata or {})


class CountingPredicate:
    """
    Predicate stub that records how many times it was tested.

    Used only to observe short-circuiting.
    """

    def __init__(self, result: bool, description: str = "counting"):
        self.result = result
        self.calls = 0
        self.predicate = Predicate(check=self._check, description=description)

    def _check(self, value: Any) -> bool:
        self.calls += 1
        return self.result


class CountingOrdering:
    """Ordering stub that records how many comparisons it made."""

    def __init__(self, base: Ordering[Any], description: str = "counting"):
        self.base = base
        self.calls = 0
        self.ordering = Ordering(comparator=self._compare, description=description)

    def _compare(self, a: Any, b: Any):
        self.calls += 1
        return self.base.compare(a, b)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def widget() -> Product:
    return make_product("Widget", "Tools", price=25)


@pytest.fixture
def anvil() -> Product:
    return make_product("Anvil", "Tools", price=120)


@pytest.fixture
def bolt() -> Product:
    return make_product("Bolt", "Hardware", price=1)


@pytest.fixture
def catalog(widget, anvil, bolt) -> list[Product]:
    """The three products of the listing scenarios, in arrival order."""
    return [widget, anvil, bolt]


@pytest.fixture
def by_category_name() -> Ordering[Product]:
    return adapt(natural(), field_getter("category.name"), description="category name")


@pytest.fixture
def by_product_name() -> Ordering[Product]:
    return adapt(natural(), lambda p: p.name, description="product name")


@pytest.fixture
def by_unavailable() -> Ordering[Product]:
    return adapt(natural(), lambda p: p.unavailable, description="unavailable")


@pytest.fixture
def by_price() -> Ordering[Product]:
    return adapt(natural(), lambda p: p.price, description="price")


@pytest.fixture
def listing(by_category_name, by_product_name) -> CompositeOrdering[Product]:
    return combine_orderings([by_category_name, by_product_name])


@pytest.fixture
def int_samples() -> list[int]:
    """Integers with duplicates and negatives."""
    return [3, -1, 0, 7, 3, 12, -5, 0, 8]


@pytest.fixture
def product_samples() -> list[Product]:
    """Products covering ties on every field used by the test orderings."""
    return [
        make_product("Widget", "Tools", price=25),
        make_product("Anvil", "Tools", price=120, unavailable=True),
        make_product("Bolt", "Hardware", price=1),
        make_product("Anvil", "Hardware", price=25),
        make_product("Clamp", "Tools", price=25),
        make_product("Bolt", "Hardware", price=2, unavailable=True),
        make_product("Drill", "Power", price=120),
    ]
