"""Diff -> prompt -> upstream -> sanitized commit message."""
from __future__ import annotations
import logging
from typing import Protocol

from commitgen_relay.common.errors import InvalidInputError
from commitgen_relay.common.sanitize import sanitize_message
from commitgen_relay.common.schema import UpstreamResult
from commitgen_relay.common.templates import load_template, render_prompt

LOGGER = logging.getLogger("commitgen.server.generator")

class TextGenerator(Protocol):
    model: str

    async def generate(self, prompt: str) -> UpstreamResult: ...

class CommitMessageGenerator:
    """Turns a staged diff into a commit message using one upstream call."""

    def __init__(self, client: TextGenerator, template: str | None = None) -> None:
        self.client = client
        self.template = template if template is not None else load_template()

    def build_prompt(self, diff: str) -> str:
        return render_prompt(self.template, diff)

    async def generate(self, diff: str | None) -> str:
        """
        Generate a commit message for a diff.

        Args:
            diff: Staged diff text.

        Raises:
            InvalidInputError: If the diff is missing or blank. The upstream
                is not called in that case.
            Exception: Whatever the upstream client raises, unchanged.
        """
        if not isinstance(diff, str) or not diff.strip():
            raise InvalidInputError("diff is missing or empty")
        result = await self.client.generate(self.build_prompt(diff))
        LOGGER.debug(
            "Latency: %sms | in=%s out=%s | model=%s",
            result.latency_ms,
            result.input_tokens,
            result.output_tokens,
            result.model,
        )
        return sanitize_message(result.text)

    async def aclose(self) -> None:
        close = getattr(self.client, "aclose", None)
        if close is not None:
            await close()
