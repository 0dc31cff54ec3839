"""Locate the version declaration in a source file.

``ExtractionService.locate`` is a pure function of ``(filename, text)``: it
parses a private tree per call and keeps no state between calls.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from functools import cache
from pathlib import Path

from tree_sitter import Language
from tree_sitter_language_pack import get_language

from versync.core.dialects import Dialect, SourceText, grammar_for
from versync.core.patterns import version_from_node, version_start
from versync.core.static import locate_static
from versync.core.syntax import parse_program
from versync.core.walker import traverse
from versync.errors import AmbiguousAssignmentWarning, CapabilityUnavailableError
from versync.models import VersionMatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParserCapabilities:
    javascript: Language
    typescript: Language | None = None


def detect_capabilities() -> ParserCapabilities:
    javascript = get_language(grammar_for(Dialect.SCRIPT))
    try:
        typescript = get_language(grammar_for(Dialect.TYPESCRIPT))
    except LookupError:
        logger.warning("TypeScript grammar not available; .ts sources cannot be processed")
        typescript = None
    return ParserCapabilities(javascript=javascript, typescript=typescript)


class ExtractionService:
    def __init__(self, capabilities: ParserCapabilities) -> None:
        self._capabilities = capabilities

    @property
    def capabilities(self) -> ParserCapabilities:
        return self._capabilities

    def locate(self, filename: str | Path, text: str) -> VersionMatch | None:
        source = SourceText.detect(filename, text)

        if source.dialect is Dialect.TYPESCRIPT:
            language = self._capabilities.typescript
            if language is None:
                raise CapabilityUnavailableError(source.filename)
            return locate_static(language, source.parseable(), source.filename)

        return self._locate_dynamic(source)

    def _locate_dynamic(self, text: SourceText) -> VersionMatch | None:
        source = text.parseable()
        root = parse_program(self._capabilities.javascript, source, text.filename)
        hit = traverse(source, root)
        if hit is None:
            logger.debug("No version declaration found in %s", text.filename)
            return None

        value = version_from_node(source, hit.node)
        # the default filter shows this once per call site; callers that need it on every call check ``canonical``
        if not hit.canonical:
            warnings.warn(
                AmbiguousAssignmentWarning(
                    f"found version number {value} in {text.filename}, but not directly assigned to "
                    f"exports or module.exports (assigned to {hit.qualifier})."
                ),
                stacklevel=3,
            )
        return VersionMatch(
            value=value,
            line=hit.node.span.line,
            offset=text.text_offset(version_start(hit.node)),
            canonical=hit.canonical,
        )


@cache
def default_service() -> ExtractionService:
    return ExtractionService(detect_capabilities())


def locate(filename: str | Path, text: str) -> VersionMatch | None:
    return default_service().locate(filename, text)
