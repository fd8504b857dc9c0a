"""
Field validation for variant group and option requests.

The mixins are applied to the request models; ``build_validated`` turns a
pydantic validation failure into the domain ``ValidationError``.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from variant_service.core.errors import ValidationError

T = TypeVar("T", bound=BaseModel)

MAX_NAME_LENGTH = 100
MAX_SKU_LENGTH = 64


class VariantGroupValidatorMixin:
    @field_validator("name")
    @classmethod
    def name_valid(cls, v):
        if v is None or not v.strip():
            raise ValueError("Group name is required")
        v = v.strip()
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Group name must be up to {MAX_NAME_LENGTH} characters")
        return v


class VariantOptionValidatorMixin:
    @field_validator("name")
    @classmethod
    def name_valid(cls, v):
        if v is None or not v.strip():
            raise ValueError("Option name is required")
        v = v.strip()
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Option name must be up to {MAX_NAME_LENGTH} characters")
        return v

    @field_validator("sku")
    @classmethod
    def sku_valid(cls, v):
        if v is None or not v.strip():
            raise ValueError("Option SKU is required")
        v = v.strip()
        if len(v) > MAX_SKU_LENGTH:
            raise ValueError(f"Option SKU must be up to {MAX_SKU_LENGTH} characters")
        return v

    @field_validator("price_modifier")
    @classmethod
    def price_modifier_valid(cls, v: Decimal):
        if not v.is_finite():
            raise ValueError("Price modifier must be a finite number")
        return v

    @field_validator("color_hex")
    @classmethod
    def color_hex_valid(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()

    @model_validator(mode="after")
    def value_defaults_to_name(self):
        if not self.value or not self.value.strip():
            self.value = self.name
        return self


def _field_errors(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    errors = []
    for err in exc.errors():
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({
            "field": ".".join(str(part) for part in err.get("loc", ())) or "__root__",
            "message": message,
        })
    return errors


def build_validated(model_class: Type[T], **fields) -> T:
    """
    Build a request model, converting validation failures to ``ValidationError``.

    The first field error becomes the corrective message; all of them are
    listed in ``details["errors"]``.
    """
    try:
        return model_class(**fields)
    except PydanticValidationError as e:
        errors = _field_errors(e)
        raise ValidationError(errors[0]["message"], errors=errors) from e


def parse_base_price(value: Union[Decimal, int, float, str]) -> Decimal:
    """
    Convert a product base price to Decimal.

    Raises:
        ValidationError: If the value is missing, not numeric or not finite
    """
    errors = [{"field": "base_price", "message": "Base price must be a finite number"}]
    if value is None or isinstance(value, bool):
        raise ValidationError("Base price must be a finite number", errors=errors)
    if isinstance(value, float):
        value = str(value)
    try:
        price = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError("Base price must be a finite number", errors=errors) from e
    if not price.is_finite():
        raise ValidationError("Base price must be a finite number", errors=errors)
    return price
