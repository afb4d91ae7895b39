"""Unified diff parsing for commit expansion.

Turns the raw text of ``git show -p`` into one :class:`FileChange` per
file, with addition and deletion counts. Uses the unidiff library so
renames, binary files, and mode-only changes are handled the way git
emits them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from unidiff import PatchSet
from unidiff.constants import DEV_NULL
from unidiff.errors import UnidiffParseError

from rewind.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "DiffParser",
    "FileChange",
    "UnifiedDiffParser",
]

_PATH_PREFIXES: tuple[str, ...] = ("a/", "b/")


@dataclass(frozen=True, slots=True)
class FileChange:
    """One file touched by a diff.

    Attributes:
        to_path: Path after the change, or None when the file was deleted.
        from_path: Path before the change, or None when the file was added.
        additions: Number of added lines.
        deletions: Number of removed lines.
        is_binary: True for binary files (counts are always zero).
        is_rename: True when the file moved.
    """

    to_path: str | None
    from_path: str | None
    additions: int = 0
    deletions: int = 0
    is_binary: bool = False
    is_rename: bool = False


@runtime_checkable
class DiffParser(Protocol):
    """Parses raw diff text. Must return ``[]`` for malformed input, never raise."""

    def parse(self, raw_diff: str) -> list[FileChange]: ...


#: Single-character escapes git uses inside quoted paths
_C_ESCAPES: dict[str, int] = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}

_OCTAL_DIGITS = frozenset("01234567")


def _unquote(filename: str) -> str:
    """Undo git's C-style path quoting.

    git wraps a path in double quotes when it contains a tab, newline,
    quote or backslash, and (unless core.quotepath is off) any byte
    outside ASCII, which it writes as an octal escape of the UTF-8
    encoding: ``"b/caf\\303\\251.txt"`` is ``b/café.txt``.
    """
    if len(filename) < 2 or filename[0] != '"' or filename[-1] != '"':
        return filename

    body = filename[1:-1]
    decoded = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\" or i + 1 == len(body):
            decoded += char.encode("utf-8")
            i += 1
            continue

        octal = body[i + 1 : i + 4]
        escape = body[i + 1]
        if (
            len(octal) == 3
            and _OCTAL_DIGITS.issuperset(octal)
            and int(octal, 8) <= 0xFF
        ):
            decoded.append(int(octal, 8))
            i += 4
        elif escape in _C_ESCAPES:
            decoded.append(_C_ESCAPES[escape])
            i += 2
        else:
            decoded += f"\\{escape}".encode()
            i += 2

    return decoded.decode("utf-8", errors="replace")


def _strip_prefix(filename: str | None) -> str | None:
    """Unquote, drop the a/ or b/ prefix git adds, and map /dev/null to None."""
    if not filename:
        return None
    filename = _unquote(filename)
    if filename == DEV_NULL:
        return None
    if filename.startswith(_PATH_PREFIXES):
        return filename[2:]
    return filename


class UnifiedDiffParser:
    """DiffParser backed by ``unidiff.PatchSet``."""

    def parse(self, raw_diff: str) -> list[FileChange]:
        """Parse diff text into file changes, in emission order.

        Args:
            raw_diff: Unified diff text, possibly empty.

        Returns:
            One FileChange per file. Empty if the text is empty or malformed.
        """
        if not raw_diff or raw_diff.isspace():
            return []

        try:
            patch = PatchSet.from_string(raw_diff)
        except UnidiffParseError as e:
            logger.warning("diff_parse_error", error=str(e))
            return []
        except Exception:  # noqa: BLE001
            # unidiff raises plain exceptions on some truncated hunks
            logger.error("diff_parse_unexpected_error", exc_info=True)
            return []

        changes: list[FileChange] = []
        for patched_file in patch:
            change = FileChange(
                to_path=_strip_prefix(patched_file.target_file),
                from_path=_strip_prefix(patched_file.source_file),
                additions=patched_file.added,
                deletions=patched_file.removed,
                is_binary=patched_file.is_binary_file,
                is_rename=patched_file.is_rename,
            )
            changes.append(change)

            if change.is_binary:
                logger.debug("binary_file_in_diff", file=change.to_path)
            if change.is_rename:
                logger.debug(
                    "rename_in_diff",
                    source=change.from_path,
                    target=change.to_path,
                )

        return changes
