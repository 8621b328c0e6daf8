"""
Response formatter.

Turns the AI's free-text answer into display blocks, one per non-empty line.
It is a generic pseudo-markdown line classifier and knows nothing about coins:

  "1. Coin Identification:"   → SectionHeader
  "- Country: United States"  → LabeledField
  "- Reeded (ridged)"         → BulletItem
  anything else               → Paragraph
"""
import re
from typing import Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict

_MARKDOWN_CHARS = re.compile(r"[*_#`]")
_NUMBERED       = re.compile(r"^\d+\.")
_NUMBER_PREFIX  = re.compile(r"^\d+\.\s*")
_LINE_BREAK     = re.compile(r"\r\n|\r|\n")


class _Block(BaseModel):
    model_config = ConfigDict(frozen=True)


class SectionHeader(_Block):
    kind:  Literal["section_header"] = "section_header"
    title: str


class LabeledField(_Block):
    kind:  Literal["labeled_field"] = "labeled_field"
    label: str
    value: str


class BulletItem(_Block):
    kind: Literal["bullet_item"] = "bullet_item"
    text: str


class Paragraph(_Block):
    kind: Literal["paragraph"] = "paragraph"
    text: str


Block = Union[SectionHeader, LabeledField, BulletItem, Paragraph]


def clean_line(line: str) -> str:
    """Strip markdown punctuation (* _ # `) and surrounding whitespace."""
    return _MARKDOWN_CHARS.sub("", line).strip()


def classify_line(line: str) -> Block | None:
    """Return the block for a single raw line, or None if it is blank."""
    clean = clean_line(line)
    if not clean:
        return None

    if _NUMBERED.match(clean):
        return SectionHeader(title=_NUMBER_PREFIX.sub("", clean, count=1).strip())

    if clean.startswith("-") and ":" in clean:
        label, value = clean[1:].split(":", 1)
        return LabeledField(label=label.strip(), value=value.strip())

    if clean.startswith("-"):
        return BulletItem(text=clean[1:].strip())

    return Paragraph(text=clean)


def format_analysis(text: str) -> Iterator[Block]:
    """Yield display blocks for every non-empty line of `text`, in order."""
    for line in _LINE_BREAK.split(text or ""):
        block = classify_line(line)
        if block is not None:
            yield block
