"""Product model and the in-memory inventory store.

Products form a closed set of two frozen dataclass variants tagged with a
:class:`~stationery_store.constants.ProductKind`. Anything that needs
variant-specific behavior looks the tag up in a dispatch table instead of
relying on subclass overrides, so adding a variant means adding one table
entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, ClassVar, Dict, Iterator, List, Optional, Union

from . import log
from .constants import CURRENCY_LABEL, Brand, ProductKind, UsageCategory


@dataclass(frozen=True)
class PhysicalProduct:
    """A tangible item with stock on a shelf."""

    kind: ClassVar[ProductKind] = ProductKind.PHYSICAL

    code: str
    name: str
    price: Decimal
    category: UsageCategory = UsageCategory.READING
    brand: Brand = Brand.ARTESCO
    stock: int = 0


@dataclass(frozen=True)
class VirtualProduct:
    """A downloadable item; stock is informational only."""

    kind: ClassVar[ProductKind] = ProductKind.VIRTUAL

    code: str
    name: str
    price: Decimal
    download_link: str = ""
    category: UsageCategory = UsageCategory.READING
    brand: Brand = Brand.ARTESCO
    stock: int = 0


Product = Union[PhysicalProduct, VirtualProduct]


def _describe_physical(product: PhysicalProduct, currency_label: str) -> str:
    return (
        f"[{product.kind.value}] Code: {product.code} | Name: {product.name} | "
        f"Category: {product.category.value} | Brand: {product.brand.value} | "
        f"Stock: {product.stock} | Price: {currency_label} {product.price}"
    )


def _describe_virtual(product: VirtualProduct, currency_label: str) -> str:
    return (
        f"[{product.kind.value}] Code: {product.code} | Name: {product.name} | "
        f"Price: {currency_label} {product.price} | Link: {product.download_link}"
    )


_DESCRIBERS: Dict[ProductKind, Callable[..., str]] = {
    ProductKind.PHYSICAL: _describe_physical,
    ProductKind.VIRTUAL: _describe_virtual,
}


def describe_product(product: Product, currency_label: str = CURRENCY_LABEL) -> str:
    """Return the one-line, human-readable description of ``product``.

    Args:
        product (Product): Any product variant.
        currency_label (str): Prefix printed before the price.

    Returns:
        str: Code, name, price, and the fields specific to the variant.

    Raises:
        KeyError: If the product carries a kind with no registered describer.
    """

    return _DESCRIBERS[product.kind](product, currency_label)


def default_products() -> List[Product]:
    """Return the catalogue the store starts with when no seed file is set."""

    return [
        PhysicalProduct(
            code="P001",
            name="A4 Notebook",
            category=UsageCategory.PAPER_AND_NOTEBOOKS,
            brand=Brand.ARTESCO,
            stock=50,
            price=Decimal("5"),
        ),
        PhysicalProduct(
            code="P002",
            name="Blue Pen",
            category=UsageCategory.WRITING,
            brand=Brand.UNIVERSAL,
            stock=100,
            price=Decimal("1.2"),
        ),
        VirtualProduct(
            code="V001",
            name="E-book: Learn Python",
            price=Decimal("10"),
            download_link="http://downloads.example.com/ebook-python",
        ),
    ]


@dataclass
class Inventory:
    """Insertion-ordered collection of every product the store knows about.

    Codes are expected to be unique but duplicates are accepted silently;
    lookups resolve to the first product inserted with a given code.
    """

    _products: List[Product] = field(default_factory=list, repr=False)

    def insert(self, product: Product) -> None:
        self._products.append(product)
        log.info("Inserted %s product '%s' into inventory", product.kind.value, product.code)

    def find_by_code(self, code: str) -> Optional[Product]:
        """Return the first product whose code equals ``code``, or ``None``."""

        for product in self._products:
            if product.code == code:
                return product
        log.debug("No product with code '%s' in inventory", code)
        return None

    def list_all(self) -> List[Product]:
        return list(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._products))
