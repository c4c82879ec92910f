# src/extraction/address_extractor.py - v1
"""LLM-backed address extraction from free-text location clues.

Builds the system prompt (area code reference, codes detected in the clues,
user context), calls the language model with retry and a hard timeout, and
parses the completion. Any failure surfaces as ExtractionError.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from eventlocator.core.errors import ExtractionError
from eventlocator.core.models import ExtractedAddress, UserCoordinates
from eventlocator.core.retry import RetryConfig, RetryExhausted, with_retry
from eventlocator.extraction.area_codes import AreaCodeDirectory
from eventlocator.extraction.response_parser import parse_extraction_response
from eventlocator.llm.base_client import BaseLLMClient
from eventlocator.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)

_PROMPT_PATH = Path(__file__).parent / "prompts" / "address_extractor.txt"


def build_user_context(
    user_city_state: str | None = None,
    user_coordinates: UserCoordinates | None = None,
) -> str:
    """One-line description of where the user is, or "" when unknown."""
    if user_city_state:
        return f"User is in {user_city_state}."
    if user_coordinates is not None:
        return f"User coordinates: {user_coordinates.lat:.5f},{user_coordinates.lng:.5f}"
    return ""


class AddressExtractor:
    """Turns clue text into an ExtractedAddress via a language model."""

    def __init__(
        self,
        llm: BaseLLMClient,
        area_codes: AreaCodeDirectory | None = None,
        temperature: float = 0.1,
        max_tokens: int = 150,
        json_mode: bool = True,
        timeout_s: float = 10.0,
        retry_configs: dict[str, RetryConfig] | None = None,
    ) -> None:
        self._llm = llm
        self._area_codes = area_codes or AreaCodeDirectory()
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._json_mode = json_mode
        self._timeout_s = timeout_s
        self._retry_configs = retry_configs
        self._prompt_template: str | None = None

    @property
    def llm(self) -> BaseLLMClient:
        return self._llm

    def _load_prompt(self) -> str:
        """Load and cache prompt template."""
        if self._prompt_template is None:
            self._prompt_template = _PROMPT_PATH.read_text(encoding="utf-8")
        return self._prompt_template

    def build_system_prompt(self, clue_text: str, user_context: str = "") -> str:
        """Fill the prompt template for one set of clues."""
        hints = self._area_codes.find_in_text(clue_text)
        if hints:
            detected = "   Area codes found in these clues:\n" + "\n".join(
                f"   - {h.code}: {h.region}" for h in hints
            ) + "\n"
        else:
            detected = ""
        return self._load_prompt().format(
            area_code_reference=self._area_codes.render_reference(),
            detected_area_codes=detected,
            user_context=user_context or "(none)",
        )

    async def extract(self, clue_text: str, user_context: str = "") -> ExtractedAddress:
        """Ask the model for an address and notes.

        Raises:
            ExtractionError: On transport failure, timeout, or an unparseable response.
        """
        system = self.build_system_prompt(clue_text, user_context)
        messages = [Message(role="user", content=f"LOCATION CLUES: {clue_text}")]

        try:
            response: LLMResponse = await with_retry(
                self._complete_once,
                messages,
                system,
                operation="address_extraction",
                retry_configs=self._retry_configs,
            )
        except RetryExhausted as e:
            raise ExtractionError(f"Address extraction failed: {e.last_error}") from e

        logger.debug(
            "Extraction response from %s/%s (%d tokens, %dms)",
            response.provider, response.model, response.total_tokens, response.latency_ms,
        )

        outcome = parse_extraction_response(response.content)
        if not outcome.ok or outcome.value is None:
            logger.warning("Unparseable extraction response: %.200r", response.content)
            raise ExtractionError(outcome.error or "Could not extract address from LLM response")

        extracted = outcome.value
        logger.info(
            "Extracted address=%r notes=%r confidence=%.2f (stage=%s)",
            extracted.address or "(none)",
            extracted.location_notes or "(none)",
            extracted.confidence,
            outcome.stage,
        )
        return extracted

    async def _complete_once(self, messages: list[Message], system: str) -> LLMResponse:
        try:
            return await asyncio.wait_for(
                self._llm.complete(
                    messages=messages,
                    system=system,
                    max_tokens=self._max_tokens,
                    temperature=self._temperature,
                    response_format=ExtractedAddress if self._json_mode else None,
                ),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise TimeoutError(
                f"LLM call timed out after {self._timeout_s:.1f}s"
            ) from e
