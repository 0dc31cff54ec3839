__version__ = "0.1.0"

from versync.core.extract import ExtractionService, ParserCapabilities, detect_capabilities, locate  # noqa: E402
from versync.core.runner import Runner, RunnerOptions, run  # noqa: E402
from versync.core.versions import (  # noqa: E402
    bump_version,
    get_sources,
    get_valid_version,
    get_version,
    rewrite_version,
    set_version,
    verify,
)
from versync.errors import (  # noqa: E402
    AmbiguousAssignmentWarning,
    CapabilityUnavailableError,
    ExecutionError,
    InconsistentVersionsError,
    InvalidVersionError,
    SourceSyntaxError,
    UnsupportedExtensionError,
    VerificationError,
    VersyncError,
)
from versync.models import VerifyResult, VersionInfo, VersionMatch  # noqa: E402

__all__ = [
    "AmbiguousAssignmentWarning",
    "CapabilityUnavailableError",
    "ExecutionError",
    "ExtractionService",
    "InconsistentVersionsError",
    "InvalidVersionError",
    "ParserCapabilities",
    "Runner",
    "RunnerOptions",
    "SourceSyntaxError",
    "UnsupportedExtensionError",
    "VerificationError",
    "VerifyResult",
    "VersionInfo",
    "VersionMatch",
    "VersyncError",
    "__version__",
    "bump_version",
    "detect_capabilities",
    "get_sources",
    "get_valid_version",
    "get_version",
    "locate",
    "rewrite_version",
    "run",
    "set_version",
    "verify",
]
