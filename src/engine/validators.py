"""
Dice Poker - Input Validation Utilities

Provides validation functions for Ledger snapshots and participant input.
All validators either return validated data or raise descriptive ValueError
exceptions.
"""

from decimal import Decimal, InvalidOperation
from typing import Sequence

from src.engine.base import DICE_PER_HAND, MAX_FACE, MIN_FACE, GamePhase


def validate_dice_values(
    values: Sequence[int],
    hidden_indices: frozenset[int] | set[int] = frozenset(),
) -> tuple[int, ...]:
    """
    Validate the five faces of one hand.

    Args:
        values: Sequence of dice values to validate
        hidden_indices: Indices of faces in an unrevealed tranche. These may
            still hold the Ledger's unrolled placeholder 0.

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    values_tuple = tuple(values)
    if len(values_tuple) != DICE_PER_HAND:
        raise ValueError(
            f"Exactly {DICE_PER_HAND} dice required, got {len(values_tuple)}."
        )

    for i, value in enumerate(values_tuple):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        low = 0 if i in hidden_indices else MIN_FACE
        if not (low <= value <= MAX_FACE):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between {low} and {MAX_FACE}."
            )

    return values_tuple


def validate_phase_index(index: int) -> GamePhase:
    """
    Convert a raw phase index into a GamePhase.

    Raises:
        ValueError: If the index is outside the 16-value range
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"Phase index must be an integer, got {type(index).__name__}.")
    try:
        return GamePhase(index)
    except ValueError:
        raise ValueError(
            f"Phase index {index} is out of range. Must be between 0 and {len(GamePhase) - 1}."
        ) from None


def validate_amount(amount: int, allow_zero: bool = True) -> int:
    """
    Validate an amount in Ledger base units.

    Args:
        amount: Amount to validate
        allow_zero: Whether zero is acceptable

    Returns:
        Validated amount

    Raises:
        ValueError: If amount is invalid
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Amount must be an integer, got {type(amount).__name__}.")

    if amount < 0:
        raise ValueError(f"Amount cannot be negative, got {amount}.")

    if not allow_zero and amount == 0:
        raise ValueError("Amount must be greater than zero.")

    return amount


def parse_amount(text: str, decimals: int = 18) -> int:
    """
    Parse a decimal currency string into integer base units.

    ``parse_amount("0.01", 18)`` returns ``10**16``.

    Args:
        text: Free-text amount typed by the participant
        decimals: Number of base-unit decimals of the currency

    Returns:
        Amount in base units

    Raises:
        ValueError: If the text is not a non-negative decimal or has more
            precision than the currency supports
    """
    cleaned = text.strip()
    if not cleaned:
        raise ValueError("Amount is empty.")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"'{cleaned}' is not a valid amount.") from None
    if not value.is_finite():
        raise ValueError(f"'{cleaned}' is not a valid amount.")
    if value < 0:
        raise ValueError(f"Amount cannot be negative, got {cleaned}.")

    scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {cleaned} has more than {decimals} decimal places.")
    return int(scaled)


def format_amount(units: int, decimals: int = 18) -> str:
    """Render base units as a plain decimal string, e.g. ``10**16 -> '0.01'``."""
    value = Decimal(units).scaleb(-decimals)
    return format(value.normalize(), "f")
