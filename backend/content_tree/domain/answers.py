"""
Typed views over the ``answers_json`` blob stored on every element.

The blob is JSON text. Layout nodes and their children keep a handful of
well-known keys in it; everything else belongs to the editor and must
survive a parse/serialize round trip untouched, so the child types keep
unknown keys in ``extra``.

Row answers historically store their arrays as comma-separated strings
(``"4,4,4"``); lists of integers are accepted as well.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Optional


def load_answers(raw: Any) -> dict:
    """Parse an answers blob, degrading to an empty dict on bad input."""
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return dict(raw)
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def dump_answers(answers: Optional[dict]) -> Optional[str]:
    if answers is None:
        return None
    return json.dumps(answers)


def parse_int(value: Any) -> Optional[int]:
    """Strict integer parse. Returns None for anything that is not a whole number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_int_list(value: Any) -> Optional[list[int]]:
    """
    Parse ``"4,8"`` / ``[4, 8]`` / ``12`` into a list of ints.

    Returns None when the value is missing, empty, or contains anything that
    is not an integer. A single bad token invalidates the whole list.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = [value]
    elif isinstance(value, str):
        if not value.strip():
            return None
        value = value.split(",")
    elif not isinstance(value, (list, tuple)):
        return None

    result = []
    for item in value:
        number = parse_int(item)
        if number is None:
            return None
        result.append(number)
    return result or None


def _aligned(values: Optional[list[int]], length: int) -> list[int]:
    # Responsive overrides only apply when there is one per column
    if not values or len(values) != length:
        return []
    return values


@dataclass
class RowAnswers:
    columns: list[int] = field(default_factory=list)
    mobile_sizes: list[int] = field(default_factory=list)
    mobile_order: list[int] = field(default_factory=list)
    malformed: bool = False
    raw_columns: Any = None

    @classmethod
    def parse(cls, raw: Any) -> "RowAnswers":
        answers = load_answers(raw)
        columns = parse_int_list(answers.get("columns"))
        if columns is None:
            return cls(malformed=True, raw_columns=answers.get("columns"))
        return cls(
            columns=columns,
            mobile_sizes=_aligned(parse_int_list(answers.get("mobileSizes")), len(columns)),
            mobile_order=_aligned(parse_int_list(answers.get("mobileOrder")), len(columns)),
            raw_columns=answers.get("columns"),
        )

    def mobile_size_at(self, index: int) -> Optional[int]:
        return self.mobile_sizes[index] if self.mobile_sizes else None

    def mobile_order_at(self, index: int) -> Optional[int]:
        return self.mobile_order[index] if self.mobile_order else None


@dataclass
class CarouselAnswers:
    slides: int = 0
    malformed: bool = False
    raw_slides: Any = None

    @classmethod
    def parse(cls, raw: Any) -> "CarouselAnswers":
        answers = load_answers(raw)
        slides = parse_int(answers.get("slides"))
        if slides is None or slides < 0:
            return cls(malformed=True, raw_slides=answers.get("slides"))
        return cls(slides=slides, raw_slides=answers.get("slides"))


@dataclass
class ColumnAnswers:
    size: Optional[int] = None
    mobile_size: Optional[int] = None
    mobile_order: Optional[int] = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: Any) -> "ColumnAnswers":
        answers = load_answers(raw)
        return cls(
            size=parse_int(answers.pop("size", None)),
            mobile_size=parse_int(answers.pop("mobileSize", None)),
            mobile_order=parse_int(answers.pop("mobileOrder", None)),
            extra=answers,
        )

    def to_dict(self) -> dict:
        answers = dict(self.extra)
        if self.size is not None:
            answers["size"] = self.size
        if self.mobile_size is not None:
            answers["mobileSize"] = self.mobile_size
        if self.mobile_order is not None:
            answers["mobileOrder"] = self.mobile_order
        return answers

    def serialize(self) -> str:
        return dump_answers(self.to_dict())


@dataclass
class SlideAnswers:
    slide: Optional[int] = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: Any) -> "SlideAnswers":
        answers = load_answers(raw)
        return cls(slide=parse_int(answers.pop("slide", None)), extra=answers)

    def to_dict(self) -> dict:
        answers = dict(self.extra)
        if self.slide is not None:
            answers["slide"] = self.slide
        return answers

    def serialize(self) -> str:
        return dump_answers(self.to_dict())
