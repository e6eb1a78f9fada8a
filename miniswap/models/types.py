"""Shared field types for the HTTP models.

Token amounts and shares cross the wire as decimal strings so that JSON
clients without big integers never round them.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

# Upper bound accepted on the wire for a single amount
MAX_AMOUNT = 2**256 - 1


def validate_amount(value: Any) -> str:
    """Validate that a value is a non-negative integer, given as string or int.

    Args:
        value: Value to validate

    Returns:
        The amount as a decimal string

    Raises:
        ValueError: If value is not a non-negative integer within MAX_AMOUNT
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a decimal integer, got a boolean")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if int_value > MAX_AMOUNT:
        raise ValueError(f"Amount overflow: {value} > 2^256-1")
    return str(int_value)


# Non-negative integer amount as decimal string (validated)
Amount = Annotated[
    str,
    BeforeValidator(validate_amount),
    Field(description="Non-negative integer amount as decimal string"),
]

TokenId = Annotated[str, Field(min_length=1, max_length=64, description="Token identifier")]

ParticipantId = Annotated[
    str, Field(min_length=1, max_length=128, description="Participant account identifier")
]
