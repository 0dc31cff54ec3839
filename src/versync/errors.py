"""Exceptions and warnings raised by versync."""


class VersyncError(Exception):
    """Base class for errors reported to the user."""


class UnsupportedExtensionError(VersyncError, ValueError):
    def __init__(self, extension: str) -> None:
        super().__init__(f"unsupported extension {extension!r}")
        self.extension = extension


class CapabilityUnavailableError(VersyncError, RuntimeError):
    def __init__(self, filename: str) -> None:
        super().__init__(
            f"file {filename} is a TypeScript file but the tree-sitter TypeScript grammar "
            "is not available; please install tree-sitter-language-pack with TypeScript support."
        )
        self.filename = filename


class SourceSyntaxError(VersyncError, SyntaxError):
    def __init__(self, filename: str, lineno: int, offset: int | None = None, text: str | None = None) -> None:
        super().__init__(f"cannot parse {filename}", (filename, lineno, offset, text))


class InvalidVersionError(VersyncError):
    pass


class InconsistentVersionsError(VersyncError):
    pass


class VerificationError(VersyncError):
    """Raised once every file was attempted and at least one of them failed."""

    def __init__(self, errors: dict[str, Exception]) -> None:
        lines = [f"{source}: {error}" for source, error in errors.items()]
        super().__init__("Version verification failed:\n" + "\n".join(lines))
        self.errors = errors


class ExecutionError(VersyncError, RuntimeError):
    def __init__(self, message: str, returncode: int, stdout: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class AmbiguousAssignmentWarning(UserWarning):
    """A version was found in an assignment whose target is not ``exports`` or ``module.exports``."""
