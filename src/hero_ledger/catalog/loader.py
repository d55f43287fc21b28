"""Loading of rules catalogs from JSON.

The package ships a catalog covering the common powers and modifiers.
A campaign with house rules points ``HERO_LEDGER_CATALOG_CATALOG_PATH``
at its own file, or builds a catalog in code and passes it to the
engine directly.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from hero_ledger.catalog.definitions import RulesCatalog
from hero_ledger.core.config import get_settings
from hero_ledger.core.exceptions import CatalogLoadError
from hero_ledger.core.logging import get_logger


logger = get_logger(__name__)

BUNDLED_CATALOG = "core_catalog.json"


def parse_catalog(text: str, *, source: str = "<string>") -> RulesCatalog:
    """Build a catalog from JSON text.

    Args:
        text: The catalog JSON.
        source: Name used in error messages.

    Returns:
        The validated catalog.

    Raises:
        CatalogLoadError: If the text is not valid JSON or not a catalog.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(
            f"Catalog is not valid JSON: {exc.msg}",
            source=source,
            details={"line": exc.lineno},
        ) from exc

    if not isinstance(data, dict):
        raise CatalogLoadError("Catalog root must be an object", source=source)

    try:
        catalog = RulesCatalog.from_mapping(data)
    except (PydanticValidationError, TypeError, ValueError) as exc:
        raise CatalogLoadError(f"Catalog is malformed: {exc}", source=source) from exc

    logger.debug(
        "Catalog parsed",
        source=source,
        powers=len(catalog.powers),
        modifiers=len(catalog.modifiers),
    )
    return catalog


def load_catalog(path: str | Path) -> RulesCatalog:
    """Load a catalog from a JSON file.

    Args:
        path: Path to the catalog file.

    Returns:
        The validated catalog.

    Raises:
        CatalogLoadError: If the file is missing, unreadable or malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise CatalogLoadError("Catalog file not found", source=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogLoadError(f"Cannot read catalog: {exc}", source=str(path)) from exc

    return parse_catalog(text, source=str(path))


def load_bundled_catalog() -> RulesCatalog:
    """Load the catalog shipped inside the package."""
    data_file = resources.files("hero_ledger.catalog").joinpath("data").joinpath(BUNDLED_CATALOG)
    text = data_file.read_text(encoding="utf-8")
    return parse_catalog(text, source=BUNDLED_CATALOG)


@lru_cache(maxsize=1)
def get_default_catalog() -> RulesCatalog:
    """Get the catalog the engine uses when a caller supplies none.

    Reads ``get_settings().catalog.catalog_path`` when set, otherwise the
    bundled catalog. Loaded once per process.

    Raises:
        CatalogLoadError: If the configured catalog cannot be loaded.
    """
    settings = get_settings().catalog
    if settings.catalog_path is not None:
        catalog = load_catalog(settings.catalog_path)
    else:
        catalog = load_bundled_catalog()
    logger.info("Rules catalog loaded", name=catalog.name, entries=len(catalog))
    return catalog


def clear_catalog_cache() -> None:
    """Forget the default catalog, forcing a reload on next access."""
    get_default_catalog.cache_clear()


__all__ = [
    "parse_catalog",
    "load_catalog",
    "load_bundled_catalog",
    "get_default_catalog",
    "clear_catalog_cache",
]
