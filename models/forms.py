"""Input forms for user-entered transactions and categories.

Raw values (amount text, ISO date text) are parsed and checked here before
anything reaches the ledger. Pydantic errors are translated into
:class:`errors.ValidationError` so callers only deal with one error type.
"""

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import ClassVar, Literal, Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from errors import ValidationError

CENTS = Decimal("0.01")

FormT = TypeVar("FormT", bound=BaseModel)


def _round_to_cents(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return value
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError("amount is too large") from None


class TransactionForm(BaseModel):
    """All fields required to record a new transaction."""

    model_config = ConfigDict(str_strip_whitespace=True)
    subject: ClassVar[str] = "transaction"

    type: Literal["income", "expense"]
    description: str = Field(min_length=1)
    amount: Decimal = Field(ge=0)
    transaction_date: date
    category_id: str = Field(min_length=1)

    @field_validator("amount")
    @classmethod
    def amount_to_cents(cls, value):
        return _round_to_cents(value)


class TransactionEditForm(BaseModel):
    """Fields that can change when editing a transaction.

    Only the fields that were passed are applied. Clearing a field (passing
    None) is rejected by the ledger before the form is parsed.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")
    subject: ClassVar[str] = "transaction"

    description: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[Decimal] = Field(default=None, ge=0)
    transaction_date: Optional[date] = None
    category_id: Optional[str] = Field(default=None, min_length=1)

    @field_validator("amount")
    @classmethod
    def amount_to_cents(cls, value):
        return _round_to_cents(value)

    def changes(self) -> dict:
        """Get only the fields that were explicitly set."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class CategoryForm(BaseModel):
    """Fields required to create a custom category."""

    model_config = ConfigDict(str_strip_whitespace=True)
    subject: ClassVar[str] = "category"

    name: str = Field(min_length=1)
    type: Literal["income", "expense"]
    icon: Optional[str] = None


def parse_form(form_class: Type[FormT], **values) -> FormT:
    """Validate raw input against a form.

    Args:
        form_class: The form model to validate against.
        **values: Raw field values.

    Returns:
        The validated form.

    Raises:
        ValidationError: If any field is missing or invalid. ``fields`` lists
            the offending field names in the order pydantic reported them.
    """
    try:
        return form_class.model_validate(values)
    except pydantic.ValidationError as e:
        fields = []
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "__root__"
            if name not in fields:
                fields.append(name)
        raise ValidationError(f"Invalid {form_class.subject} input", fields) from e
