"""Validation of the Notion database property schema."""

from collections.abc import Iterable
from typing import Any

from stars_sync.sync.errors import SchemaViolationError
from stars_sync.sync.schemas import REQUIRED_PROPERTIES, RequiredProperty


def validate_database_schema(
    database: dict[str, Any],
    required: Iterable[RequiredProperty] = REQUIRED_PROPERTIES,
) -> None:
    """
    Check that the database exposes every required property with the exact type.

    Stops at the first violation; violations are not aggregated.

    Args:
        database: Raw Notion database object
        required: Properties to check (defaults to REQUIRED_PROPERTIES)

    Raises:
        SchemaViolationError: If a property is missing or has another type
    """
    properties = database.get("properties") or {}

    for prop in required:
        descriptor = properties.get(prop.name)
        if not isinstance(descriptor, dict):
            raise SchemaViolationError(
                f"notion database is missing required property {prop.name}",
                property_name=prop.name,
            )

        actual = descriptor.get("type")
        if actual != prop.type:
            raise SchemaViolationError(
                f"notion database property {prop.name} is of type {actual}, but should be {prop.type}",
                property_name=prop.name,
            )
