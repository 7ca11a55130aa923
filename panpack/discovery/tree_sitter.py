"""Tree-sitter powered scanner for exported Rust functions."""

from __future__ import annotations

from typing import List, Optional

from .base import EntryPointScanner, merge_ordered
from .lexical import EXPORT_MARKER

try:  # pragma: no cover - optional dependency
    import tree_sitter_rust
    from tree_sitter import Language, Parser

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    tree_sitter_rust = None  # type: ignore[assignment]
    Language = None  # type: ignore[assignment]
    Parser = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False

_COMMENT_NODES = {"line_comment", "block_comment"}


class TreeSitterScanner(EntryPointScanner):
    """Parses the entry file and reports top-level functions only."""

    name = "syntax"

    def __init__(self) -> None:
        if not TREE_SITTER_AVAILABLE:
            raise RuntimeError(
                "the 'syntax' discovery strategy needs tree-sitter; "
                "install panpack[syntax]"
            )
        self._parser: Optional[Parser] = None

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_rust.language()))
        return self._parser

    def scan(self, source: str) -> List[str]:
        source_bytes = source.encode("utf-8")
        tree = self._get_parser().parse(source_bytes)

        public: List[str] = []
        marked: List[str] = []
        attributes: List[str] = []
        for node in tree.root_node.named_children:
            if node.type == "attribute_item":
                attributes.append(_node_text(node, source_bytes))
                continue
            if node.type in _COMMENT_NODES:
                continue
            if node.type == "function_item":
                name_node = node.child_by_field_name("name")
                name = _node_text(name_node, source_bytes) if name_node else ""
                if name:
                    if _is_public(node, source_bytes):
                        public.append(name)
                    if any(_is_export_marker(attr) for attr in attributes):
                        marked.append(name)
            attributes = []
        return merge_ordered(public, marked)


def _is_public(node, source_bytes: bytes) -> bool:  # type: ignore[no-untyped-def]
    for child in node.children:
        if child.type == "visibility_modifier":
            return _node_text(child, source_bytes).strip() == "pub"
    return False


def _is_export_marker(attribute: str) -> bool:
    inner = attribute.strip()
    if inner.startswith("#"):
        inner = inner[1:].strip()
    return inner.strip("[] \t\n") == EXPORT_MARKER


def _node_text(node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


__all__ = ["TREE_SITTER_AVAILABLE", "TreeSitterScanner"]
