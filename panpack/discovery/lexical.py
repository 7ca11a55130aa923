"""Regex-based scanner for exported Rust functions."""

from __future__ import annotations

import re
from typing import List

from .base import EntryPointScanner, merge_ordered

EXPORT_MARKER = "panpan_export"

_QUALIFIERS = r'(?:(?:const|async|unsafe|extern(?:\s+"[^"]*")?)\s+)*'

_PUB_FN = re.compile(r"\bpub\s+" + _QUALIFIERS + r"fn\s+([A-Za-z_][A-Za-z0-9_]*)")
_MARKED_FN = re.compile(
    r"#\s*\[\s*" + EXPORT_MARKER + r"\s*\]\s*"
    r"(?:#\s*\[[^\]]*\]\s*)*"
    r"(?:pub(?:\s*\([^)]*\))?\s+)?"
    + _QUALIFIERS
    + r"fn\s+([A-Za-z_][A-Za-z0-9_]*)"
)


class LexicalScanner(EntryPointScanner):
    """Best-effort lexical scan; no parsing, so nested or commented items also match."""

    name = "lexical"

    def scan(self, source: str) -> List[str]:
        public = [match.group(1) for match in _PUB_FN.finditer(source)]
        marked = [match.group(1) for match in _MARKED_FN.finditer(source)]
        return merge_ordered(public, marked)


__all__ = ["EXPORT_MARKER", "LexicalScanner"]
