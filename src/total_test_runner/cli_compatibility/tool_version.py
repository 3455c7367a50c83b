"""Total Test CLI version parsing and compatibility checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import zip_longest
from pathlib import Path

from lxml import etree

VERSION_FILENAME = "versions.xml"
_PRODUCT_ID = "TTT"

_LOGGER = logging.getLogger("total_test_runner.cli_compatibility")


class ToolVersionError(ValueError):
    """Raised when a version string cannot be parsed."""


class ToolCompatibilityError(Exception):
    """Raised when the installed Total Test CLI is older than the hard minimum."""


@dataclass(frozen=True)
class ToolVersion:
    """Dotted numeric version of the Total Test CLI."""

    components: tuple[int, ...]

    @classmethod
    def parse(cls, text: str) -> ToolVersion:
        stripped = text.strip()
        if not stripped:
            raise ToolVersionError("Version string must not be empty.")
        components = []
        for part in stripped.split("."):
            if not (part.isascii() and part.isdigit()):
                raise ToolVersionError(f"Invalid version string: {text!r}")
            components.append(int(part))
        return cls(components=tuple(components))

    def is_at_least(self, required: ToolVersion) -> bool:
        # Missing trailing components count as zero, so 20.5 == 20.05.00.
        for installed_part, required_part in zip_longest(
            self.components, required.components, fillvalue=0
        ):
            if installed_part != required_part:
                return installed_part > required_part
        return True

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.components)


def is_at_least(installed: ToolVersion | str | None, required: ToolVersion | str) -> bool:
    """Return True when ``installed`` is greater than or equal to ``required``.

    An unknown or unparseable installed version never satisfies the gate.
    """
    try:
        installed_version = _coerce(installed)
        required_version = _coerce(required)
    except ToolVersionError:
        return False
    if installed_version is None or required_version is None:
        return False
    return installed_version.is_at_least(required_version)


def assert_compatible(installed: ToolVersion | str | None, minimum: ToolVersion | str) -> None:
    """Raise ToolCompatibilityError unless ``installed`` satisfies ``minimum``."""
    if installed is None:
        raise ToolCompatibilityError(
            "Unable to determine the Total Test CLI version; "
            f"version {minimum} or later is required."
        )
    try:
        installed_version = _coerce(installed)
    except ToolVersionError as exc:
        raise ToolCompatibilityError(
            f"Unable to determine the Total Test CLI version: {exc}"
        ) from exc
    if not is_at_least(installed_version, minimum):
        raise ToolCompatibilityError(
            f"Total Test CLI version {installed_version} is not supported; "
            f"version {minimum} or later is required."
        )


def read_tool_version(cli_directory: Path | str) -> ToolVersion | None:
    """Read the installed CLI version from the vendor ``versions.xml`` file.

    Returns None when the file is missing or carries no usable version.
    """
    version_path = Path(cli_directory) / VERSION_FILENAME
    if not version_path.is_file():
        _LOGGER.warning("Total Test CLI version file not found: %s", version_path)
        return None
    parser = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)
    try:
        root = etree.fromstring(version_path.read_bytes(), parser)
    except (OSError, etree.XMLSyntaxError) as exc:
        _LOGGER.warning("Unable to read Total Test CLI version file %s: %s", version_path, exc)
        return None

    candidates = (
        root.xpath(f"/products/product[@id='{_PRODUCT_ID}']/@version")
        or root.xpath("//product/@version")
        or root.xpath("/*/@version")
    )
    for candidate in candidates:
        try:
            return ToolVersion.parse(str(candidate))
        except ToolVersionError:
            continue
    _LOGGER.warning("No Total Test CLI version found in %s", version_path)
    return None


def _coerce(value: ToolVersion | str | None) -> ToolVersion | None:
    if value is None or isinstance(value, ToolVersion):
        return value
    return ToolVersion.parse(value)
