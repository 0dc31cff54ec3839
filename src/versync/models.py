from pydantic import BaseModel, ConfigDict


class VersionMatch(BaseModel):
    """Where a version was found in a source text.

    ``offset`` is the index of the first character of ``value`` in the text
    that was searched. ``canonical`` is false for assignments to something
    other than ``exports`` or ``module.exports``.
    """

    model_config = ConfigDict(frozen=True)

    value: str
    line: int
    offset: int
    canonical: bool = True


class VersionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    line: int
    source: str


class VerifyResult(BaseModel):
    consistent: bool
    versions: list[VersionInfo]
