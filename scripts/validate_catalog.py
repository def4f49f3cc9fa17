#!/usr/bin/env python
"""CLI utility to validate a permission catalog document before deployment."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from admin_permissions.core.config import DEFAULT_CATALOG_PATH, DEFAULT_NAVIGATION_PATH
from admin_permissions.services.catalog import CatalogConfigurationError, load_catalog
from admin_permissions.services.navigation import load_navigation


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate the permission catalog and sidebar configuration.")
    parser.add_argument("--catalog", type=Path, default=DEFAULT_CATALOG_PATH, help="Catalog JSON document.")
    parser.add_argument("--navigation", type=Path, default=DEFAULT_NAVIGATION_PATH, help="Sidebar JSON document.")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a permission requires a code missing from the catalog.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(args.catalog)
        load_navigation(args.navigation, catalog)
    except CatalogConfigurationError as exc:
        logging.error("Permission configuration invalid: %s", exc)
        return 1

    unknown = catalog.unknown_references()
    for code, missing in sorted(unknown.items()):
        logging.warning("Permission %s requires unknown codes %s", code, sorted(missing))
    if unknown and args.strict:
        return 2

    logging.info(
        "Permission catalog valid: %s modules, %s permissions",
        len(catalog.modules()),
        len(catalog),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
