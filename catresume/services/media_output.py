"""Normalization of image/video generator results into a single URL.

Replicate returns a bare URL string, a list of file outputs, or a single file
output object whose ``str()`` is its URL, depending on the model and client
version. Those shapes are classified into ``MediaOutput`` variants first and
then collapsed by ``media_url``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

EMPTY_OUTPUT = ""


@dataclass(frozen=True)
class TextOutput:
    text: str


@dataclass(frozen=True)
class SequenceOutput:
    items: tuple[Any, ...]


@dataclass(frozen=True)
class OpaqueOutput:
    value: Any


MediaOutput = Union[TextOutput, SequenceOutput, OpaqueOutput]


def _has_own_str(value: Any) -> bool:
    # Raw payload bytes stringify to their repr, never to a URL.
    if isinstance(value, (bytes, bytearray, memoryview)):
        return False
    return type(value).__str__ is not object.__str__


def classify_output(raw: Any) -> MediaOutput | None:
    if isinstance(raw, str):
        return TextOutput(raw)
    if isinstance(raw, (list, tuple)):
        return SequenceOutput(tuple(raw))
    if raw is not None and _has_own_str(raw):
        return OpaqueOutput(raw)
    return None


def media_url(output: MediaOutput | None) -> str:
    """Return the URL carried by ``output`` or ``EMPTY_OUTPUT``."""
    if isinstance(output, SequenceOutput):
        if not output.items:
            return EMPTY_OUTPUT
        first = output.items[0]
        if first is None:
            return EMPTY_OUTPUT
        return str(first).strip()
    if isinstance(output, TextOutput):
        return output.text.strip()
    if isinstance(output, OpaqueOutput):
        return str(output.value).strip()
    return EMPTY_OUTPUT


def normalize_media_output(raw: Any) -> str:
    return media_url(classify_output(raw))
