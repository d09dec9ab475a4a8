"""JSON-file extraction source."""

from __future__ import annotations

import json
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from lifeboard.domain.errors import BatchValidationError

from .schema import ExtractionBatchPayload
from .translator import translate_batch

if TYPE_CHECKING:
    from lifeboard.domain.ports import CandidateBatch

log = getLogger(__name__)


def parse_batch(data: object, *, origin: str | None = None) -> CandidateBatch:
    """Validate decoded extraction output.

    Accepts a bare list of items, ``{"items": [...]}``, or
    ``{"sourceId": ..., "items": [...]}`` where the top-level source id applies
    to items that carry none.
    """

    if isinstance(data, list):
        data = {"items": data}
    if not isinstance(data, dict) or "items" not in data:
        raise BatchValidationError("Extraction payload must be a list or an object with 'items'")
    try:
        payload = ExtractionBatchPayload.model_validate(data)
    except ValidationError as exc:
        raise BatchValidationError(f"Malformed extraction payload: {exc}") from exc
    batch = translate_batch(payload, origin=origin)
    log.debug("Parsed %d candidate(s) from %s", len(batch.items), origin or "payload")
    return batch


class JsonFileCandidateSource:
    """Candidate source reading one extraction JSON document from disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def __call__(self) -> CandidateBatch:
        text = self.path.read_text(encoding="utf-8")
        try:
            data: object = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BatchValidationError(f"{self.path} is not valid JSON: {exc}") from exc
        return parse_batch(data, origin=str(self.path))


if TYPE_CHECKING:
    from lifeboard.domain.ports import CandidateSource

    _source_check: CandidateSource = JsonFileCandidateSource("batch.json")
