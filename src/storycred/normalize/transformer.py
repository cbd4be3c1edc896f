# src/storycred/normalize/transformer.py

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from dateutil import parser as date_parser
from pydantic import ValidationError

from storycred.errors import InvalidInputError
from storycred.normalize.schema import Story

logger = logging.getLogger(__name__)

# camelCase keys emitted by the web client -> model field names
_KEY_ALIASES = {
    "verificationStatus": "verification_status",
    "dateDetected": "date_detected",
}


class StoryNormalizer:
    """
    Normalizes raw story records into validated Story objects.

    Accepts dicts or JSON strings in either snake_case or the camelCase shape
    used by the web client, and coerces free-form detection dates.
    """

    def __init__(self, default_region: str = "Global"):
        self.default_region = default_region

    def normalize(self, raw_input: Union[Dict[str, Any], str, Story]) -> Story:
        """
        Normalize a raw record into a Story.

        Args:
            raw_input: Story, dict, or JSON string describing one story

        Returns:
            Validated Story.

        Raises:
            InvalidInputError: If the record is malformed or violates value domains.
        """
        if isinstance(raw_input, Story):
            return raw_input

        if isinstance(raw_input, str):
            try:
                data = json.loads(raw_input)
            except json.JSONDecodeError as e:
                raise InvalidInputError(f"Story record is not valid JSON: {e}") from e
        else:
            data = raw_input

        if not isinstance(data, dict):
            raise InvalidInputError(
                f"Story record must be a mapping, got {type(data).__name__}"
            )

        fields = {_KEY_ALIASES.get(key, key): value for key, value in data.items()}
        if "id" in fields and not isinstance(fields["id"], str):
            fields["id"] = str(fields["id"])
        if not fields.get("region"):
            fields["region"] = self.default_region
        if "date_detected" in fields:
            fields["date_detected"] = self._parse_date(fields["date_detected"])

        try:
            return Story(**fields)
        except ValidationError as e:
            summary = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidInputError(
                f"Invalid story {fields.get('id', '<unknown>')}: {summary}"
            ) from e

    def _parse_date(self, value: Any) -> Any:
        """Parse non-ISO date strings; leave everything else for pydantic."""
        if not isinstance(value, str) or not value.strip():
            return value or None
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise InvalidInputError(f"Unrecognised detection date: {value!r}") from e


def normalize_raw_story(raw_input: Union[Dict[str, Any], str, Story]) -> Story:
    """Convenience wrapper around StoryNormalizer with default settings."""
    return StoryNormalizer().normalize(raw_input)


def load_stories(path: Union[str, Path], strict: bool = True) -> List[Story]:
    """
    Load story records from a YAML or JSON file.

    The file holds either a list of records or a mapping with a "stories" list.

    Args:
        path: Path to .yaml/.yml/.json file
        strict: Raise on the first invalid record instead of skipping it

    Returns:
        List of validated Story objects, in file order.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            payload = json.load(f)
        else:
            payload = yaml.safe_load(f)

    if isinstance(payload, dict):
        payload = payload.get("stories", [])
    if not isinstance(payload, list):
        raise InvalidInputError(f"{path} does not contain a list of stories")

    normalizer = StoryNormalizer()
    stories = []
    for record in payload:
        try:
            stories.append(normalizer.normalize(record))
        except InvalidInputError as e:
            if strict:
                raise
            logger.warning(f"Skipping story record: {e}")

    logger.info(f"Loaded {len(stories)} stories from {path}")
    return stories
