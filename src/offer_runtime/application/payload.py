"""Extraction of offer items from the upstream offer feed payload."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from offer_runtime.application.errors import InvalidPayloadError

OFFER_FEED_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["offer_sections"],
    "properties": {
        "offer_sections": {
            "type": "object",
            "required": ["PBO"],
            "properties": {
                "PBO": {
                    "type": "object",
                    "required": ["offers"],
                    "properties": {
                        "offers": {"type": "array", "items": {"type": "object"}},
                    },
                },
            },
        },
    },
}


def extract_offer_items(payload: Any) -> list[dict[str, Any]]:
    """Return the offer items under offer_sections.PBO.offers, or raise InvalidPayloadError."""
    try:
        jsonschema.validate(instance=payload, schema=OFFER_FEED_SCHEMA)
    except jsonschema.ValidationError as e:
        raise InvalidPayloadError(f"Missing or invalid offer_sections.PBO.offers in request body: {e.message}") from e
    return list(payload["offer_sections"]["PBO"]["offers"])


def load_offer_items(path: str | Path) -> list[dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidPayloadError(f"Offer feed file is not valid JSON: {e}") from e
    return extract_offer_items(payload)
