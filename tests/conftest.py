"""Shared pytest fixtures and utilities for the stationery store tests."""

from __future__ import annotations

import sys
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Callable, Iterator, List, Optional

import pytest

# Ensure source packages are importable without installation.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from stationery_store import cli, core_logic, data_manager  # noqa: E402
from stationery_store.catalog import Inventory, PhysicalProduct, VirtualProduct  # noqa: E402
from stationery_store.constants import Brand, UsageCategory  # noqa: E402
from stationery_store.setup_catalog import create_catalog_workbook  # noqa: E402

_CONFIG_TEMPLATE = (
    "[Store]\n"
    "StoreName = {store_name}\n"
    "CurrencyLabel = {currency_label}\n\n"
    "[Catalog]\n"
    "SeedFile = {seed_file}\n"
)


@dataclass(frozen=True)
class ConfigBundle:
    """Container bundling together config metadata for tests."""

    directory: Path
    config_path: Path
    seed_path: Optional[Path]
    store_name: str


@dataclass
class ScriptedConsole:
    """Console double that answers prompts from a script and records output."""

    answers: List[str]
    prompts: List[str] = field(default_factory=list)
    output: List[str] = field(default_factory=list)

    def read(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError("script exhausted")
        return self.answers.pop(0)

    def write(self, text: str) -> None:
        self.output.append(text)

    def as_console(self) -> cli.Console:
        return cli.Console(read=self.read, write=self.write)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture(scope="session", autouse=True)
def _restore_sys_path() -> Iterator[None]:
    """Ensure sys.path modifications are undone after the test session."""

    original = sys.path.copy()
    try:
        yield
    finally:
        sys.path[:] = original


@pytest.fixture
def notebook() -> PhysicalProduct:
    return PhysicalProduct(
        code="P001",
        name="A4 Notebook",
        category=UsageCategory.PAPER_AND_NOTEBOOKS,
        brand=Brand.ARTESCO,
        stock=50,
        price=Decimal("5"),
    )


@pytest.fixture
def crayons() -> PhysicalProduct:
    return PhysicalProduct(
        code="P002",
        name="Crayons x12",
        category=UsageCategory.COLORING,
        brand=Brand.FABER_CASTELL,
        stock=30,
        price=Decimal("10"),
    )


@pytest.fixture
def ebook() -> VirtualProduct:
    return VirtualProduct(
        code="V001",
        name="E-book: Learn Python",
        price=Decimal("10"),
        download_link="http://downloads.example.com/ebook-python",
    )


@pytest.fixture
def settings() -> data_manager.StoreSettings:
    return data_manager.StoreSettings.defaults()


@pytest.fixture
def context(settings, notebook, crayons, ebook) -> core_logic.RuntimeContext:
    """Runtime context seeded with a notebook, crayons, and an e-book."""

    inventory = Inventory()
    for product in (notebook, crayons, ebook):
        inventory.insert(product)
    return core_logic.RuntimeContext(settings=settings, inventory=inventory)


@pytest.fixture
def catalog_workbook_path(tmp_path: Path) -> Path:
    """Return a fresh seed workbook holding the default catalogue."""

    return create_catalog_workbook(tmp_path / f"catalog_{uuid.uuid4().hex}.xlsx")


@pytest.fixture
def config_factory(tmp_path: Path) -> Callable[..., ConfigBundle]:
    """Provide a callable that writes config.ini files on demand."""

    def _create_config(
        *,
        store_name: str = "Test Store",
        currency_label: str = "S/.",
        seed_path: Optional[Path] = None,
        make_relative: bool = False,
    ) -> ConfigBundle:
        bundle_dir = tmp_path / f"bundle_{uuid.uuid4().hex}"
        bundle_dir.mkdir(parents=True, exist_ok=True)
        seed_entry = ""
        if seed_path is not None:
            if make_relative:
                local_seed = bundle_dir / seed_path.name
                local_seed.write_bytes(seed_path.read_bytes())
                seed_path = local_seed
                seed_entry = local_seed.name
            else:
                seed_entry = str(seed_path)
        config_path = bundle_dir / "config.ini"
        config_path.write_text(
            _CONFIG_TEMPLATE.format(
                store_name=store_name,
                currency_label=currency_label,
                seed_file=seed_entry,
            )
        )
        return ConfigBundle(
            directory=bundle_dir,
            config_path=config_path,
            seed_path=seed_path,
            store_name=store_name,
        )

    return _create_config


@pytest.fixture
def scripted_console() -> Callable[..., ScriptedConsole]:
    def _create(*answers: str) -> ScriptedConsole:
        return ScriptedConsole(answers=list(answers))

    return _create
