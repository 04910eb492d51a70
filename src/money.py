from dataclasses import dataclass

from errors import MoneyOverflowError

SCALE = 10_000
FRACTION_DIGITS = 4

# Signed 64-bit range of the scaled integer.
MIN_UNITS = -(2 ** 63)
MAX_UNITS = 2 ** 63 - 1


@dataclass(frozen=True, order=True)
class Money:
    """
    Fixed-point amount stored as an integer number of 1/10000 units.
    Addition and subtraction are range-checked and raise MoneyOverflowError.
    """

    units: int = 0

    def __post_init__(self):
        if not MIN_UNITS <= self.units <= MAX_UNITS:
            raise MoneyOverflowError()

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.units + other.units)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.units - other.units)

    def __str__(self) -> str:
        sign = "-" if self.units < 0 else ""
        whole, fraction = divmod(abs(self.units), SCALE)
        return f"{sign}{whole}.{fraction:0{FRACTION_DIGITS}d}"

    def __repr__(self) -> str:
        return f"Money({self})"


ZERO = Money(0)
