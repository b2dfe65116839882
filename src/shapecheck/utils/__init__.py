"""Utility exports for JSON-safe value rendering."""

from shapecheck.utils.jsonvalues import JSONScalar, JSONValue, canonical_json, normalize_json_value

__all__ = ["JSONScalar", "JSONValue", "canonical_json", "normalize_json_value"]
