from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from versync.errors import UnsupportedExtensionError


class Dialect(str, Enum):
    JSON = "json"
    SCRIPT = "script"
    TYPESCRIPT = "typescript"


_EXTENSION_DIALECT_MAP = {
    ".json": Dialect.JSON,
    ".js": Dialect.SCRIPT,
    ".mjs": Dialect.SCRIPT,
    ".ts": Dialect.TYPESCRIPT,
}

# tree-sitter-language-pack grammar used to parse each dialect
_DIALECT_GRAMMARS = {
    Dialect.JSON: "javascript",
    Dialect.SCRIPT: "javascript",
    Dialect.TYPESCRIPT: "typescript",
}

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(_EXTENSION_DIALECT_MAP)

_JSON_PREFIX = "("
_JSON_SUFFIX = ")"


def detect_dialect(filename: str | Path) -> Dialect:
    suffix = Path(filename).suffix
    if suffix in _EXTENSION_DIALECT_MAP:
        return _EXTENSION_DIALECT_MAP[suffix]
    raise UnsupportedExtensionError(suffix.lstrip("."))


def grammar_for(dialect: Dialect) -> str:
    return _DIALECT_GRAMMARS[dialect]


@dataclass(frozen=True)
class SourceText:
    filename: str
    text: str
    dialect: Dialect

    @classmethod
    def detect(cls, filename: str | Path, text: str) -> "SourceText":
        return cls(filename=str(filename), text=text, dialect=detect_dialect(filename))

    def parseable(self) -> bytes:
        """Source bytes handed to the parser. JSON is parenthesized so it parses as an expression."""
        if self.dialect is Dialect.JSON:
            return f"{_JSON_PREFIX}{self.text}{_JSON_SUFFIX}".encode("utf-8")
        return self.text.encode("utf-8")

    def text_offset(self, byte_offset: int) -> int:
        """Map a byte offset into ``parseable()`` to a character offset into ``text``."""
        prefix = len(_JSON_PREFIX) if self.dialect is Dialect.JSON else 0
        return len(self.parseable()[:byte_offset].decode("utf-8")) - prefix
