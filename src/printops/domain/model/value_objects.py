"""Immutable values used by orders, pricing and batches.

Each one validates itself on construction, so a Quantity of zero or a
negative margin cannot be built in the first place.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from printops.domain.exceptions import ValidationError

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """An order price or price component, in Decimal.

    Totals are rounded only once, at the end, with ``rounded()``.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def rounded(self) -> Money:
        """Quantize to cents, half-up."""
        return Money(self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Build from a str, int or float via its string form."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """Number of printed units on an order; always at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}",
                fields=("quantity",),
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive", fields=("quantity",))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Dimensions:
    """Width x height in millimetres, both strictly positive."""

    width: Decimal
    height: Decimal

    def __post_init__(self) -> None:
        bad = [
            name
            for name, value in (("width", self.width), ("height", self.height))
            if not isinstance(value, Decimal) or not value.is_finite() or value <= 0
        ]
        if bad:
            raise ValidationError(
                f"Dimensions must be finite positive numbers: {', '.join(bad)}",
                fields=bad,
            )

    @property
    def area_sq_m(self) -> Decimal:
        # mm inputs normalised with the /10000 factor used by the price sheet
        return (self.width * self.height) / Decimal("10000")

    @staticmethod
    def of(width: str | float | int | Decimal, height: str | float | int | Decimal) -> Dimensions:
        try:
            return Dimensions(Decimal(str(width)), Decimal(str(height)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(
                f"Invalid dimensions: {width!r} x {height!r}",
                fields=("width", "height"),
            ) from exc

    def __str__(self) -> str:
        return f"{self.width}x{self.height}mm"


@dataclass(frozen=True)
class Margins:
    """Sheet margins in millimetres used by the packing optimizer."""

    top: Decimal = Decimal("0")
    bottom: Decimal = Decimal("0")
    left: Decimal = Decimal("0")
    right: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        bad = [
            name
            for name in ("top", "bottom", "left", "right")
            if not getattr(self, name).is_finite() or getattr(self, name) < 0
        ]
        if bad:
            raise ValidationError(
                f"Margins must be finite and not negative: {', '.join(bad)}",
                fields=[f"margins.{n}" for n in bad],
            )

    @staticmethod
    def of(top=0, bottom=0, left=0, right=0) -> Margins:
        try:
            return Margins(*(Decimal(str(v)) for v in (top, bottom, left, right)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError("Invalid margins", fields=("margins",)) from exc

    def to_dict(self) -> dict[str, str]:
        return {
            "top": str(self.top),
            "bottom": str(self.bottom),
            "left": str(self.left),
            "right": str(self.right),
        }
