"""Slot schemas: the parameter shape each intent extracts from an utterance."""
import json
import logging
import math
import re
from typing import Any, List, Literal, Optional

import dateparser
from pydantic import BaseModel

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"-?\d[\d,]*(?:\.\d+)?")


class SlotValidationError(ValueError):
    """Parsed model output does not satisfy an intent's slot schema."""


class SlotField(BaseModel):
    """Slot definition."""
    name: str
    type: Literal["string", "number", "enum", "date"]
    description: str = ""
    required: bool = False
    nullable: bool = False  # null is a legitimate answer, not a failure
    default: Any = None
    enum: Optional[List[str]] = None


class SlotExample(BaseModel):
    """Worked example shown to the model."""
    text: str
    params: dict[str, Any]


class SlotSchema(BaseModel):
    """Extraction contract for one intent."""
    label: str
    slots: List[SlotField]
    rules: List[str] = []
    examples: List[SlotExample] = []
    forbidden: List[str] = []  # fields the model must never produce
    fallback_message: str
    echo_fallback: bool = False  # confirmation may quote fallback params

    def missing_required(self, params: dict[str, Any]) -> List[str]:
        """Required slots the caller still has to collect."""
        return [slot.name for slot in self.slots if slot.required and params.get(slot.name) is None]

    def json_shape(self) -> str:
        """Render the literal JSON shape used in the extraction prompt."""
        parts = []
        for slot in self.slots:
            if slot.type == "enum" and slot.enum:
                rendered = "|".join(f'"{v}"' for v in slot.enum)
            elif slot.type == "date":
                rendered = 'string ("YYYY-MM-DD")'
            else:
                rendered = slot.type
            if slot.nullable:
                rendered = f"{rendered}|null"
            parts.append(f'"{slot.name}": {rendered}')
        return "{ " + ", ".join(parts) + " }"

    def render_examples(self) -> List[str]:
        return [f'"{ex.text}" -> {json.dumps(ex.params)}' for ex in self.examples]

    def validate_params(self, raw: Any) -> dict[str, Any]:
        """
        Keep known slots, coerce their values and apply defaults.

        Raises SlotValidationError when the output is not an object or a
        required slot is missing or unusable. Optional slots with bad values
        are dropped.
        """
        if not isinstance(raw, dict):
            raise SlotValidationError(f"Expected a JSON object, got {type(raw).__name__}")

        params: dict[str, Any] = {}
        for slot in self.slots:
            value = raw.get(slot.name)
            if isinstance(value, str) and not value.strip():
                value = None

            if value is None:
                if slot.default is not None:
                    params[slot.name] = slot.default
                elif slot.nullable and (slot.required or slot.name in raw):
                    params[slot.name] = None
                elif slot.required:
                    raise SlotValidationError(f"Missing required slot '{slot.name}'")
                continue

            try:
                params[slot.name] = _coerce(slot, value)
            except SlotValidationError:
                if slot.required:
                    raise
                logger.debug(f"Dropping unusable value for '{slot.name}': {value!r}")
                if slot.default is not None:
                    params[slot.name] = slot.default

        return params

    def fallback_params(self, utterance: str) -> dict[str, Any]:
        """
        Minimal params derived from the raw utterance when extraction fails.

        Required text slots take the whole utterance and required number slots
        the first number in it. Enum and nullable slots are left for the
        caller to ask about.
        """
        params: dict[str, Any] = {}
        for slot in self.slots:
            if slot.required and not slot.nullable and slot.type == "string":
                if utterance.strip():
                    params[slot.name] = utterance.strip()
            elif slot.required and not slot.nullable and slot.type == "number":
                number = first_number(utterance)
                if number is not None:
                    params[slot.name] = number
            elif slot.default is not None:
                params[slot.name] = slot.default
        return params


def first_number(text: str) -> Optional[float]:
    """First numeric token in text ("$1,200.50" -> 1200.5), or None."""
    match = _NUMBER_RE.search(text)
    if not match:
        return None
    number = float(match.group().replace(",", ""))
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _coerce(slot: SlotField, value: Any) -> Any:
    if slot.type == "number":
        if isinstance(value, bool):
            raise SlotValidationError(f"'{slot.name}' must be a number")
        if isinstance(value, float) and not math.isfinite(value):
            raise SlotValidationError(f"'{slot.name}' must be a finite number")
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            number = first_number(value)
            if number is not None:
                return number
        raise SlotValidationError(f"'{slot.name}' must be a number, got {value!r}")

    if slot.type == "enum":
        if not isinstance(value, str):
            raise SlotValidationError(f"'{slot.name}' must be a string")
        normalized = value.strip().lower().replace(" ", "_").replace("-", "_")
        if slot.enum and normalized not in slot.enum:
            raise SlotValidationError(f"'{slot.name}' must be one of {slot.enum}, got {value!r}")
        return normalized

    if slot.type == "date":
        if not isinstance(value, str):
            raise SlotValidationError(f"'{slot.name}' must be a date string")
        parsed = dateparser.parse(value, settings={"PREFER_DATES_FROM": "future"})
        if parsed is None:
            raise SlotValidationError(f"'{slot.name}' is not a recognizable date: {value!r}")
        return parsed.strftime("%Y-%m-%d")

    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise SlotValidationError(f"'{slot.name}' must be text")
    return str(value).strip()
