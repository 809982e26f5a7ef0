"""Schema validation for model payloads."""

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


@lru_cache(maxsize=None)
def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_evaluation(data: dict) -> None:
    """Validate an evaluation payload against schema. Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("evaluation")
    jsonschema.validate(data, schema)
