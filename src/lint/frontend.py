"""Syntax front-end using tree-sitter for TypeScript and TSX parsing.

Provides the tree query capability the detectors rely on:
- Enumerate nodes by kind
- Retrieve a node's source text and span
- Locate the first syntax error of a file
"""

from collections.abc import Iterator
from enum import Enum
from pathlib import Path

import structlog

from src.lint.errors import ParseError
from src.models.diagnostics import Span

logger = structlog.get_logger()


class SourceLanguage(str, Enum):
    """Grammars understood by the front-end."""

    TYPESCRIPT = "typescript"
    TSX = "tsx"


EXTENSION_LANGUAGES = {
    ".ts": SourceLanguage.TYPESCRIPT,
    ".mts": SourceLanguage.TYPESCRIPT,
    ".cts": SourceLanguage.TYPESCRIPT,
    ".tsx": SourceLanguage.TSX,
    ".jsx": SourceLanguage.TSX,
    ".js": SourceLanguage.TSX,
    ".mjs": SourceLanguage.TSX,
    ".cjs": SourceLanguage.TSX,
}


def language_for_path(file_path: str | Path) -> SourceLanguage:
    """Pick the grammar for a file by extension, defaulting to TSX."""
    return EXTENSION_LANGUAGES.get(Path(file_path).suffix.lower(), SourceLanguage.TSX)


def node_key(node) -> tuple[int, int, str]:
    """Identity of a node that stays stable across repeated lookups."""
    return (node.start_byte, node.end_byte, node.type)


class SyntaxTree:
    """A parsed source file.

    Wraps the tree-sitter tree together with the source bytes so that
    detectors can read node text and spans without touching the parser.
    """

    def __init__(self, tree, source: bytes, file_path: str, language: SourceLanguage):
        self._tree = tree
        self.source = source
        self.file_path = file_path
        self.language = language

    @property
    def root(self):
        return self._tree.root_node

    @property
    def has_errors(self) -> bool:
        return self.root.has_error

    def text(self, node) -> str:
        """Get the text of a node."""
        if node is None:
            return ""
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def span(self, node) -> Span:
        """Get the span of a node."""
        return Span(
            start=node.start_byte,
            end=node.end_byte,
            line=node.start_point[0] + 1,  # 1-indexed
            column=node.start_point[1] + 1,
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1] + 1,
        )

    def span_for_range(self, start: int, end: int) -> Span:
        """Get the span of an arbitrary byte range, e.g. part of a string literal."""
        def position(offset: int) -> tuple[int, int]:
            line_start = self.source.rfind(b"\n", 0, offset) + 1
            return self.source.count(b"\n", 0, offset) + 1, offset - line_start + 1

        line, column = position(start)
        end_line, end_column = position(end)
        return Span(start, end, line, column, end_line, end_column)

    def walk(self, root=None) -> Iterator:
        """Yield every node below ``root`` (inclusive) in document order."""
        stack = [root if root is not None else self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_nodes(self, *node_types: str, root=None) -> list:
        """Find all nodes of the given types."""
        wanted = set(node_types)
        return [node for node in self.walk(root) if node.type in wanted]

    def first_error(self):
        """Return the first ERROR or missing node, or None."""
        if not self.has_errors:
            return None
        for node in self.walk():
            if node.type == "ERROR" or node.is_missing:
                return node
        return self.root

    def check(self) -> None:
        """Raise ParseError if the tree contains syntax errors."""
        error = self.first_error()
        if error is None:
            return
        span = self.span(error)
        if error.is_missing:
            reason = f"Missing '{error.type}'"
        else:
            snippet = self.text(error).strip().splitlines()
            reason = f"Unexpected syntax near '{snippet[0][:40]}'" if snippet else "Unexpected syntax"
        raise ParseError(self.file_path, reason, span.line, span.column, span.start)


class SourceParser:
    """Parses TypeScript and TSX sources with tree-sitter."""

    def __init__(self):
        self._logger = logger.bind(component="SourceParser")
        self._languages: dict[SourceLanguage, object] = {}
        self._initialized = False

    def _ensure_initialized(self) -> None:
        """Lazy initialization of tree-sitter grammars."""
        if self._initialized:
            return

        try:
            import tree_sitter_typescript as tstypescript
            from tree_sitter import Language

            self._languages = {
                SourceLanguage.TYPESCRIPT: Language(tstypescript.language_typescript()),
                SourceLanguage.TSX: Language(tstypescript.language_tsx()),
            }
            self._initialized = True
            self._logger.info("Tree-sitter initialized", grammars=[g.value for g in self._languages])
        except Exception as e:
            self._logger.error("Failed to initialize tree-sitter", error=str(e))
            raise RuntimeError(f"tree-sitter initialization failed: {e}")

    def parse(
        self,
        code: str,
        file_path: str = "<string>",
        language: SourceLanguage | None = None,
    ) -> SyntaxTree:
        """Parse source code into a syntax tree.

        Args:
            code: TypeScript or TSX source
            file_path: Path for reporting; also selects the grammar
            language: Explicit grammar, overriding the extension

        Returns:
            SyntaxTree, possibly containing error nodes
        """
        from tree_sitter import Parser

        self._ensure_initialized()

        language = language or language_for_path(file_path)
        source = bytes(code, "utf-8")
        # Parsers are not shareable across threads; they are cheap to build.
        parser = Parser(self._languages[language])
        tree = parser.parse(source)

        syntax_tree = SyntaxTree(tree, source, file_path, language)
        if syntax_tree.has_errors:
            self._logger.warning("Source has syntax errors", file=file_path)
        return syntax_tree

    def parse_file(self, file_path: str | Path) -> SyntaxTree:
        """Parse a file from disk.

        Raises:
            ParseError: if the file is missing or cannot be decoded
        """
        path = Path(file_path)
        if not path.is_file():
            raise ParseError(str(path), f"File not found: {path}")

        try:
            code = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(str(path), f"Cannot read file: {e}")

        return self.parse(code, str(path))
