"""Validation for product and comment form submissions.

Clients submit the product edit form as a dictionary (`imageUrl`, `name`,
`count`, `width`, `height`, `weight`). These validators turn it into a
`ProductFormData` or raise `FormValidationError` so the API can return HTTP 422
with structured `field_errors`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.integrations.contracts.catalog import ProductFormData


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _strip(v: Any) -> str:
    return "" if v is None else str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Dict[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None, alias: Optional[str] = None) -> str:
    raw = payload.get(field)
    if raw is None and alias:
        raw = payload.get(alias)
    value = _strip(raw)
    if not value:
        add_error(errors, field, f"{label or field} is required")
    return value


def parse_int(payload: Dict[str, Any], field: str, errors: Dict[str, str], *, label: str, min_value: int) -> int:
    raw = payload.get(field)
    if raw is None or _strip(raw) == "" or isinstance(raw, bool):
        add_error(errors, field, f"{label} is required")
        return 0
    try:
        as_float = float(_strip(raw))
    except ValueError:
        add_error(errors, field, f"{label} must be a whole number")
        return 0
    if not as_float.is_integer():
        add_error(errors, field, f"{label} must be a whole number")
        return 0
    val = int(as_float)
    if val < min_value:
        add_error(errors, field, f"{label} must be at least {min_value}")
    return val


def parse_positive_number(payload: Dict[str, Any], field: str, errors: Dict[str, str], *, label: str) -> float:
    raw = payload.get(field)
    if raw is None or _strip(raw) == "" or isinstance(raw, bool):
        add_error(errors, field, f"{label} is required")
        return 0.0
    try:
        val = float(_strip(raw))
    except ValueError:
        add_error(errors, field, f"{label} must be a number")
        return 0.0
    if not val > 0:
        add_error(errors, field, f"{label} must be greater than 0")
    return val


def validate_product_form(payload: Dict[str, Any]) -> ProductFormData:
    errors: Dict[str, str] = {}

    name = require_str(payload, "name", errors, label="Product name")
    image_url = require_str(payload, "imageUrl", errors, label="Image URL", alias="image_url")
    count = parse_int(payload, "count", errors, label="Count", min_value=1)
    width = parse_positive_number(payload, "width", errors, label="Width")
    height = parse_positive_number(payload, "height", errors, label="Height")
    weight = require_str(payload, "weight", errors, label="Weight")

    if errors:
        raise FormValidationError(field_errors=errors, message="Product form is not valid")

    return ProductFormData(
        image_url=image_url,
        name=name,
        count=count,
        width=width,
        height=height,
        weight=weight,
    )


def validate_comment_description(value: Any) -> str:
    description = _strip(value)
    if not description:
        raise FormValidationError(
            field_errors={"description": "Comment text is required"},
            message="Comment is not valid",
        )
    return description
