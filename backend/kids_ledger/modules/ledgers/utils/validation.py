import math
from decimal import Decimal, InvalidOperation

from kids_ledger.modules.ledgers.services.errors import LedgerValidationError

MAX_NAME_LENGTH = 200
MAX_EMOJI_LENGTH = 16
# Numeric(12, 2) holds ten integer digits.
MAX_AMOUNT = Decimal("1e10")
CENT = Decimal("0.01")
BALANCE_OPERATIONS = {"add", "remove"}


def NormalizeText(value: str | None) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise LedgerValidationError("Expected text")
    return " ".join(value.strip().split())


def ValidateName(value: str | None, label: str = "Name") -> str:
    normalized = NormalizeText(value)
    if not normalized:
        raise LedgerValidationError(f"{label} is required")
    if len(normalized) > MAX_NAME_LENGTH:
        raise LedgerValidationError(f"{label} is too long")
    return normalized


def ValidateEmoji(value: str | None) -> str:
    normalized = NormalizeText(value)
    if not normalized:
        raise LedgerValidationError("Emoji is required")
    if len(normalized) > MAX_EMOJI_LENGTH:
        raise LedgerValidationError("Emoji is too long")
    return normalized


def CoerceId(value, label: str = "Id") -> int:
    if isinstance(value, bool):
        raise LedgerValidationError(f"{label} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise LedgerValidationError(f"{label} must be an integer") from exc
    if isinstance(value, float) and number != value:
        raise LedgerValidationError(f"{label} must be an integer")
    return number


def CoerceOptionalId(value, label: str) -> int | None:
    if value is None:
        return None
    return CoerceId(value, label)


def CoerceAmount(value, label: str = "Amount") -> Decimal:
    if isinstance(value, bool):
        raise LedgerValidationError(f"{label} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise LedgerValidationError(f"{label} must be a finite number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise LedgerValidationError(f"{label} must be a number") from exc
    if not amount.is_finite():
        raise LedgerValidationError(f"{label} must be a finite number")
    if abs(amount) >= MAX_AMOUNT:
        raise LedgerValidationError(f"{label} is too large")
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation as exc:
        raise LedgerValidationError(f"{label} must be a number") from exc
    if quantized != amount:
        raise LedgerValidationError(f"{label} has more than 2 decimal places")
    return quantized


def ValidatePositiveAmount(value) -> Decimal:
    amount = CoerceAmount(value)
    if amount <= 0:
        raise LedgerValidationError("Amount must be greater than zero")
    return amount


def ValidateOperation(value: str | None) -> str:
    normalized = value.strip().lower() if isinstance(value, str) else ""
    if normalized not in BALANCE_OPERATIONS:
        raise LedgerValidationError("Operation must be add or remove")
    return normalized
