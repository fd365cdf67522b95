"""Bundled recipe catalogs."""

from dietplanner.catalog.loader import CatalogError, load_catalog, load_catalog_for_label

__all__ = [
    "CatalogError",
    "load_catalog",
    "load_catalog_for_label",
]
