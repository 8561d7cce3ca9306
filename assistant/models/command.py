"""Extraction and command result data models"""
from pydantic import BaseModel
from typing import Optional, Any

from models.intent import Intent


class ExtractionResult(BaseModel):
    """Outcome of one slot extractor: usable params, or a degraded fallback with a reason."""
    params: dict[str, Any] = {}
    degraded: bool = False
    reason: Optional[str] = None
    warnings: list[str] = []

    @classmethod
    def ok(cls, params: dict[str, Any], warnings: Optional[list[str]] = None) -> "ExtractionResult":
        return cls(params=params, warnings=warnings or [])

    @classmethod
    def fallback(cls, params: dict[str, Any], reason: str) -> "ExtractionResult":
        return cls(params=params, degraded=True, reason=reason)


class CommandResult(BaseModel):
    """What the interpreter hands back to the caller for one utterance."""
    intent: Intent
    params: dict[str, Any] = {}
    confirmation_message: str = ""
    original_query: str
    degraded: bool = False
    reason: Optional[str] = None
    missing_fields: list[str] = []  # slots the caller still has to ask the user for
