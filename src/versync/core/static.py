from pathlib import Path

from tree_sitter import Language, Query, QueryCursor

from versync.core.syntax import parse_tree
from versync.models import VersionMatch


def _load_query(language: Language, name: str) -> Query:
    queries_dir = Path(__file__).parent.parent / "queries"
    query_path = queries_dir / f"{name}.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(language, query_text)


def locate_static(language: Language, source: bytes, filename: str) -> VersionMatch | None:
    """Find a top-level ``version`` declaration initialized with a string literal.

    Nested blocks are not searched. When several declarations match, the first
    one in the file wins.
    """
    tree = parse_tree(language, source, filename)
    cursor = QueryCursor(_load_query(language, "typescript_version"))

    best = None
    for _, captures in cursor.matches(tree.root_node):
        name = captures["version.name"][0]
        value = captures["version.value"][0]
        if source[name.start_byte : name.end_byte] != b"version":
            continue
        if best is None or value.start_byte < best.start_byte:
            best = value

    if best is None:
        return None
    # raw text between the quotes, escapes included, so it can be spliced back verbatim
    start = best.start_byte + 1
    return VersionMatch(
        value=source[start : best.end_byte - 1].decode("utf-8"),
        line=best.start_point[0] + 1,
        offset=len(source[:start].decode("utf-8")),
    )
