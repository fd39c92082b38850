"""
Typed objects mirroring the JSON document emitted by ``gocov test``.

Only the fields the viewer consumes are modelled; anything else in the
document is ignored. Go encodes empty slices as ``null``, so list fields
accept ``null`` and normalise it to an empty list.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from gocovgui.errors import DecodeError


class _GocovModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class _ByteRange(_GocovModel):
    start: int = Field(alias="Start")
    end: int = Field(alias="End")

    @field_validator("end")
    @classmethod
    def _end_not_before_start(cls, v: int, info: ValidationInfo) -> int:
        start = info.data.get("start")
        if start is not None and v < start:
            msg = "end must be >= start"
            raise ValueError(msg)
        return v


class RawStatement(_ByteRange):
    reached: int = Field(default=0, alias="Reached")


class RawFunction(_ByteRange):
    name: str = Field(alias="Name")
    file: str = Field(alias="File")
    statements: list[RawStatement] = Field(default_factory=list, alias="Statements")

    @field_validator("statements", mode="before")
    @classmethod
    def _null_statements(cls, v: object) -> object:
        return [] if v is None else v


class RawPackage(_GocovModel):
    name: str = Field(alias="Name")
    functions: list[RawFunction] = Field(default_factory=list, alias="Functions")

    @field_validator("functions", mode="before")
    @classmethod
    def _null_functions(cls, v: object) -> object:
        return [] if v is None else v


class CoverageRun(_GocovModel):
    """One complete collector result; rebuilt on every refresh."""

    packages: list[RawPackage] = Field(default_factory=list, alias="Packages")

    @field_validator("packages", mode="before")
    @classmethod
    def _null_packages(cls, v: object) -> object:
        return [] if v is None else v


def decode_run(data: bytes | str) -> CoverageRun:
    """Parse collector output into a :class:`CoverageRun`.

    Raises
    ------
    DecodeError
        When *data* is not JSON or does not have the expected shape.
    """
    try:
        return CoverageRun.model_validate_json(data)
    except ValidationError as exc:
        msg = f"failed to decode gocov output: {exc}"
        raise DecodeError(msg) from exc


__all__ = [
    "CoverageRun",
    "RawFunction",
    "RawPackage",
    "RawStatement",
    "decode_run",
]
