"""Disambiguation of test packages sharing the same name."""

import logging
import random
from collections.abc import Sequence

from spec_runner.models.unit import TestUnit

log = logging.getLogger(__name__)


def resolve_conflicts(units: Sequence[TestUnit]) -> None:
    """Give an alias to every unit whose name is already taken.

    Units are compared in list order against the first unit seen with the
    same name. A derived alias that is already taken falls back to a random
    digit suffix. Units that already have an alias keep it, so running this
    again over a resolved list changes nothing.
    """
    seen: dict[str, int] = {}
    for index, unit in enumerate(units):
        if unit.name not in seen:
            seen[unit.name] = index
            continue

        first = units[seen[unit.name]]
        if unit.alias is not None:
            log.warning(
                "Package %s (%s) still collides with %s",
                unit.name,
                unit.import_path,
                first.import_path,
            )
            continue

        alias = rename(unit.package_name, first.import_path, unit.import_path)
        if alias in seen:
            alias = digit_suffix(unit.package_name)
        unit.alias = alias
        log.info(
            "Package %s at %s renamed to %s (collides with %s)",
            unit.package_name,
            unit.import_path,
            unit.alias,
            first.import_path,
        )
        seen.setdefault(alias, index)


def rename(package_name: str, first_import_path: str, import_path: str) -> str:
    """Derive an alternative name for package_name.

    The alias is the package name prefixed with the first character where
    the last segments of the two import paths differ. When no character
    differs within the shorter segment, a random digit is appended instead;
    the result is not checked for further collisions.
    """
    first_leaf = first_import_path.rsplit("/", 1)[-1]
    leaf = import_path.rsplit("/", 1)[-1]

    for first_char, char in zip(first_leaf, leaf):
        if first_char != char:
            return f"{char}{package_name}"

    return digit_suffix(package_name)


def digit_suffix(package_name: str) -> str:
    """Append one random decimal digit to package_name."""
    return f"{package_name}{random.randint(0, 9)}"
