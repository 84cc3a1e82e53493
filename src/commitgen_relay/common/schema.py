"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass

from pydantic import BaseModel

class GenerateIn(BaseModel):
    # Optional so a missing key reaches the handler and becomes a 400.
    diff: str | None = None

class GenerateOut(BaseModel):
    message: str

class ErrorOut(BaseModel):
    error: str

@dataclass
class UpstreamResult:
    """Text generation response metadata."""
    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
