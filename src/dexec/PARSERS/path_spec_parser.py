"""
Parser for source and include entries of the form ``name[:ro|:rw]``.
"""
import re
from typing import Optional, Tuple

from ..MODELS.invocation import PathSpec


class PathSpecParser:
    """
    Splits a path entry into its basename and mount permission.

    Names are restricted to letters, digits, underscore, dot and hyphen.
    Entries that do not fit that grammar are not rejected: the whole entry
    becomes the basename and the permission is left empty.
    """
    PATTERN = re.compile(r"([\w.-]+)(:(ro|rw))", re.ASCII)

    @staticmethod
    def parse(raw: str) -> PathSpec:
        """
        Parses a single path entry.

        Args:
            raw (str): Entry such as ``lib.rs``, ``lib.rs:ro`` or ``data:rw``.

        Returns:
            PathSpec: The parsed entry, keeping the raw string.
        """
        split = PathSpecParser._match_permission(raw)
        if split is not None:
            basename, permission = split
        else:
            basename, permission = raw, ""
        return PathSpec(raw=raw, basename=basename, permission=permission)

    @staticmethod
    def split(raw: str) -> Tuple[str, str]:
        """
        Returns ``(basename, permission)`` for an entry.
        """
        spec = PathSpecParser.parse(raw)
        return spec.basename, spec.permission

    @staticmethod
    def _match_permission(raw: str) -> Optional[Tuple[str, str]]:
        match = PathSpecParser.PATTERN.fullmatch(raw)
        if match is None:
            return None
        return match.group(1), match.group(3)
