"""Utility for creating the stationery store's seed catalogue workbook.

The module doubles as a script (``python -m stationery_store.setup_catalog``)
and as a library used by tests. The generated workbook holds the default
catalogue and can then be edited by hand and referenced from ``config.ini``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Sequence

import openpyxl
from openpyxl.styles import Font

from . import data_manager
from .catalog import Product, default_products

DEFAULT_DESTINATION = "catalog.xlsx"


def create_catalog_workbook(
    destination: Path,
    *,
    products: Iterable[Product] | None = None,
    columns: Sequence[str] = data_manager.PRODUCT_COLUMNS,
    overwrite: bool = False,
) -> Path:
    """Create a catalogue workbook at ``destination``.

    When ``products`` is omitted the default catalogue is written. When
    ``overwrite`` is ``False`` (the default) this function raises
    ``FileExistsError`` if the target already exists.
    """

    destination = Path(destination).expanduser().resolve()
    if destination.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing catalogue workbook: {destination}"
        )

    workbook = openpyxl.Workbook()

    # Remove the default sheet openpyxl generates so we can create ours.
    if workbook.active and workbook.active.title == "Sheet":
        workbook.remove(workbook.active)

    bold_font = Font(bold=True)
    worksheet = workbook.create_sheet(title=data_manager.PRODUCTS_SHEET)
    for column_index, column_name in enumerate(columns, start=1):
        cell = worksheet.cell(row=1, column=column_index)
        cell.value = column_name
        cell.font = bold_font

    for product in products if products is not None else default_products():
        data_manager.append_product(workbook, product)

    data_manager.save_workbook(workbook, destination)
    return destination


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the setup script."""

    parser = argparse.ArgumentParser(description="Create the stationery store seed catalogue")
    parser.add_argument(
        "--output",
        default=DEFAULT_DESTINATION,
        help="Where to write the workbook (default: catalog.xlsx)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the target workbook if it already exists.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the setup script."""

    args = parse_args(argv)
    destination = Path(args.output)

    print("--- Stationery Store Catalogue Setup ---")

    try:
        output_path = create_catalog_workbook(destination, overwrite=args.force)
    except FileExistsError as exc:
        print(f"\n[ERROR] {exc}")
        print("Run with --force to overwrite the existing file if appropriate.")
        return 1
    except (PermissionError, OSError) as exc:
        print(f"\n[ERROR] Unable to write workbook: {exc}")
        return 1

    print(f"\n[SUCCESS] Created catalogue workbook at '{output_path}'.")
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via manual runs
    sys.exit(main())
