"""Normalization stage: turn raw client stdout into ``AnimationData``.

The Audio2Face client prints either a JSON document already shaped as
``{"blendshapes": [...], "duration": ...}`` or CSV-like text with a header
row followed by ``name,value,time`` rows. JSON is tried first; tabular
parsing only runs when JSON fails, and the JSON error is only dropped once
the tabular parser has also accepted the text.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Union

import pydantic

from .errors import ParseError
from .types import AnimationData, AnimationFrame

logger = logging.getLogger("app.pipelines.animation")

_MIN_FIELDS = 3


@dataclass(frozen=True)
class StructuredOutput:
    data: AnimationData


@dataclass(frozen=True)
class TabularOutput:
    data: AnimationData
    header: str
    skipped_lines: int


NormalizedOutput = Union[StructuredOutput, TabularOutput]


class TabularFormatError(ValueError):
    """Raised when text has no usable ``name,value,time`` header."""


def parse_structured(raw_output: str) -> AnimationData:
    """Parse the whole text as one JSON AnimationData document."""

    document = json.loads(raw_output)
    # JSON without a frame list is rejected here and falls through to the tabular parser.
    return AnimationData.model_validate(document)


def _to_float(field: str) -> float:
    try:
        return float(field)
    except ValueError:
        return math.nan


def parse_tabular(raw_output: str) -> TabularOutput:
    """Parse header + ``name,value,time`` rows, skipping short rows."""

    lines = [line for line in raw_output.splitlines() if line.strip()]
    if not lines:
        raise TabularFormatError("output is empty")

    header = lines[0].strip()
    if header.startswith(("{", "[")):
        raise TabularFormatError("output looks like a JSON document")
    header_fields = [field.strip() for field in header.split(",")]
    if len([field for field in header_fields if field]) < _MIN_FIELDS:
        raise TabularFormatError(f"header {header!r} has fewer than {_MIN_FIELDS} fields")

    frames: list[AnimationFrame] = []
    skipped = 0
    for line in lines[1:]:
        fields = [field.strip() for field in line.split(",")]
        if len(fields) < _MIN_FIELDS or not all(fields[:_MIN_FIELDS]):
            skipped += 1
            continue
        name, value, time = fields[:_MIN_FIELDS]
        frames.append(AnimationFrame(name=name, value=_to_float(value), time=_to_float(time)))

    return TabularOutput(
        data=AnimationData(frames=tuple(frames)),
        header=header,
        skipped_lines=skipped,
    )


def detect(raw_output: str) -> NormalizedOutput:
    """Return whichever encoding ``raw_output`` is in."""

    try:
        return StructuredOutput(parse_structured(raw_output))
    except (json.JSONDecodeError, pydantic.ValidationError) as structured_error:
        try:
            return parse_tabular(raw_output)
        except TabularFormatError as tabular_error:
            raise ParseError(
                f"Unrecognized animation output: not JSON ({_summarize(structured_error)}) "
                f"and not tabular ({tabular_error})"
            ) from structured_error


def normalize(raw_output: str) -> AnimationData:
    """Parse the client output into ``AnimationData``."""

    result = detect(raw_output)
    if isinstance(result, TabularOutput):
        logger.info(
            "Parsed tabular animation output: %d frames, %d lines skipped",
            len(result.data.frames),
            result.skipped_lines,
        )
    else:
        logger.info("Parsed JSON animation output: %d frames", len(result.data.frames))
    return result.data


def _summarize(error: Exception) -> str:
    if isinstance(error, pydantic.ValidationError):
        return f"{error.error_count()} schema error(s)"
    return str(error)


__all__ = [
    "NormalizedOutput",
    "StructuredOutput",
    "TabularOutput",
    "TabularFormatError",
    "detect",
    "normalize",
    "parse_structured",
    "parse_tabular",
]
