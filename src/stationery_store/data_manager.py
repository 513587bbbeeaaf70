"""Data access layer for the stationery store.

This module provides low-level helpers for the two external inputs the store
reads at start-up. Business logic belongs elsewhere.

The public API is designed around two responsibilities:

1. Configuration handling: finding and parsing ``config.ini``.
2. Catalogue workbook: opening the optional seed workbook and turning its
   ``Products`` rows into product dataclasses (and back, for the bootstrap
   script).

Nothing is ever written back while the store runs; the workbook only seeds
the in-memory inventory.
"""


from __future__ import annotations

import configparser
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional, Sequence

from openpyxl.workbook import Workbook
import openpyxl

from . import log
from .catalog import PhysicalProduct, Product, VirtualProduct
from .constants import CURRENCY_LABEL, Brand, ProductKind, UsageCategory


CONFIG_FILE_NAME = "config.ini"
PRODUCTS_SHEET = "Products"
PRODUCT_COLUMNS: Sequence[str] = (
    "Kind",
    "Code",
    "Name",
    "Category",
    "Brand",
    "Stock",
    "Price",
    "DownloadLink",
)
DEFAULT_STORE_NAME = "Stationery Store"


@dataclass(frozen=True)
class StoreSettings:
    """Typed representation of the ``config.ini`` settings we care about."""

    store_name: str
    currency_label: str
    seed_file: Optional[Path]
    log_dir: Optional[Path] = None

    @classmethod
    def defaults(cls) -> "StoreSettings":
        """Settings used when no configuration file can be found."""

        return cls(store_name=DEFAULT_STORE_NAME, currency_label=CURRENCY_LABEL, seed_file=None)


def find_config_file(explicit_path: Optional[Path] = None) -> Path:
    """Locate the configuration file that controls how the store starts.

    If the caller provides ``explicit_path`` the value is returned immediately
    without any verification. When no explicit path is given the function
    walks up from the current working directory toward the filesystem root
    looking for a file named ``CONFIG_FILE_NAME``; the first match wins.

    Args:
        explicit_path (Path | None): Optional path to use instead of performing
            the upward search.

    Returns:
        Path: The path provided by the caller or the discovered configuration
            file.

    Raises:
        FileNotFoundError: If the search exhausts all parent directories without
            finding ``CONFIG_FILE_NAME``.
    """

    if explicit_path:
        return explicit_path

    current = Path.cwd()
    for p in (current, *current.parents):
        candidate = p / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate

    raise FileNotFoundError(
        f"Configuration file not found: {CONFIG_FILE_NAME}")


def read_config(config_path: Path) -> configparser.ConfigParser:
    """Load ``config.ini`` and return a populated ``ConfigParser`` instance.

    Args:
        config_path (Path): Path to the configuration file, relative or
            absolute. ``~`` is expanded.

    Returns:
        configparser.ConfigParser: Parser holding the raw configuration data.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist after expansion and
            resolution.
    """

    config_path = Path(config_path).expanduser().resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    parser = configparser.ConfigParser()
    parser.read(config_path, encoding="utf-8")
    return parser


def parse_settings(parser: configparser.ConfigParser, *, base_path: Optional[Path] = None) -> StoreSettings:
    """Convert a ``ConfigParser`` into strongly typed :class:`StoreSettings`.

    ``[Store]`` must define ``StoreName`` and ``CurrencyLabel``. The
    ``[Catalog] SeedFile`` and ``[Logging] LogDir`` are optional; relative
    paths are anchored to ``base_path`` (or the working directory).

    Args:
        parser (configparser.ConfigParser): Parsed configuration data.
        base_path (Path | None): Directory used as the anchor for a relative
            ``SeedFile`` or ``LogDir``.

    Returns:
        StoreSettings: Immutable settings container.

    Raises:
        KeyError: If a required section or option is missing.
    """

    try:
        store_name = parser.get("Store", "StoreName")
        currency_label = parser.get("Store", "CurrencyLabel")
    except (configparser.NoSectionError, configparser.NoOptionError) as exc:
        raise KeyError(f"Missing required configuration entry: {exc}") from exc

    if base_path is None:
        base_path = Path.cwd()
    seed_file = _optional_path(parser.get("Catalog", "SeedFile", fallback=""), base_path)
    log_dir = _optional_path(parser.get("Logging", "LogDir", fallback=""), base_path)

    return StoreSettings(
        store_name=store_name,
        currency_label=currency_label,
        seed_file=seed_file,
        log_dir=log_dir,
    )


def _optional_path(raw: str, base_path: Path) -> Optional[Path]:
    """Resolve a config path entry against ``base_path``; blank means unset."""

    raw = raw.strip()
    if not raw:
        return None
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_path / path).resolve()
    return path


def open_workbook(data_file: Path) -> Workbook:
    """Open a catalogue workbook and return the live ``openpyxl`` workbook.

    Raises:
        FileNotFoundError: If ``data_file`` does not exist after expansion and
            resolution.
    """

    data_file = Path(data_file).expanduser().resolve()
    if not data_file.exists():
        raise FileNotFoundError(f"Workbook not found: {data_file}")

    wb = openpyxl.load_workbook(data_file)
    return wb


def save_workbook(workbook: Workbook, destination: Path) -> None:
    """Persist ``workbook`` at ``destination``, creating parent folders."""

    dest = Path(destination).expanduser().resolve()
    dest.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(dest)


def iter_products(workbook: Workbook) -> Iterable[Product]:
    """Iterate over product records stored on the ``Products`` worksheet.

    The header row and fully empty rows are skipped. Every other row is
    converted through :func:`deserialize_product`.

    Args:
        workbook (Workbook): Workbook containing the ``Products`` sheet.

    Yields:
        Product: One product per meaningful row, in sheet order.

    Raises:
        KeyError: If the workbook has no ``Products`` sheet.
    """

    if PRODUCTS_SHEET not in workbook.sheetnames:
        raise KeyError(f"Workbook has no '{PRODUCTS_SHEET}' sheet")
    sheet = workbook[PRODUCTS_SHEET]
    for raw in sheet.iter_rows(min_row=2, values_only=True):
        # skip fully empty rows
        if any(cell is not None for cell in raw):
            yield deserialize_product(raw)


def load_seed_products(seed_file: Path) -> list[Product]:
    """Open ``seed_file`` and return every product it lists."""

    workbook = open_workbook(seed_file)
    products = list(iter_products(workbook))
    log.info("Loaded %d product(s) from seed workbook '%s'", len(products), seed_file)
    return products


def append_product(workbook: Workbook, record: Product) -> None:
    """Append ``record`` to the ``Products`` worksheet in column order."""

    sheet = workbook[PRODUCTS_SHEET]
    sheet.append(serialize_product(record))


def serialize_product(record: Product) -> list[object]:
    """Convert a product dataclass into the worksheet column ordering.

    Prices are written as strings so the exact decimal value survives the
    round trip through Excel.
    """

    download_link = record.download_link if isinstance(record, VirtualProduct) else None
    return [
        record.kind.value,
        record.code,
        record.name,
        record.category.value,
        record.brand.value,
        record.stock,
        str(record.price),
        download_link,
    ]


def deserialize_product(raw_row: Sequence[object]) -> Product:
    """Convert a raw worksheet row into a product dataclass.

    Identifiers and names are coerced to ``str`` because Excel happily turns
    numeric-looking codes into numbers. Blank category, brand, and stock cells
    fall back to the dataclass defaults.

    Args:
        raw_row (Sequence[object]): Cell values in ``PRODUCT_COLUMNS`` order.
            Trailing cells may be missing.

    Returns:
        Product: Physical or virtual product, depending on the ``Kind`` cell.

    Raises:
        ValueError: If the code is blank, or the kind, category, or brand is
            not a known value.
    """

    padded = list(raw_row) + [None] * (len(PRODUCT_COLUMNS) - len(raw_row))
    kind_raw, code, name, category_raw, brand_raw, stock_raw, price_raw, link = padded[: len(PRODUCT_COLUMNS)]

    if code is None or not str(code).strip():
        log.error("Catalogue row without a product code: %s", list(raw_row))
        raise ValueError("Product code is required")
    kind = ProductKind(str(kind_raw)) if kind_raw is not None else ProductKind.PHYSICAL
    price = Decimal(str(price_raw)) if price_raw is not None else Decimal("0")
    common = {
        "code": str(code).strip(),
        "name": str(name) if name is not None else "",
        "price": price,
        "category": UsageCategory(str(category_raw)) if category_raw is not None else UsageCategory.READING,
        "brand": Brand(str(brand_raw)) if brand_raw is not None else Brand.ARTESCO,
        "stock": int(stock_raw) if stock_raw is not None else 0,
    }

    if kind is ProductKind.VIRTUAL:
        return VirtualProduct(download_link=str(link) if link is not None else "", **common)
    return PhysicalProduct(**common)
