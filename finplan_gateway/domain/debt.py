"""Debt entity - a single loan-like obligation that accrues interest per period"""

from dataclasses import dataclass, field

# Principal at or below this is treated as exactly zero
PAID_OFF_TOLERANCE = 1e-9


@dataclass(frozen=True)
class DebtSnapshot:
    """Immutable record of a debt's identity and balance at a point in time"""

    original_principal: float
    original_rate: float
    balance: float = 0.0


@dataclass
class Debt:
    """
    Mutable balance for one obligation.

    `principal` changes only through apply_payment(). `original_principal` and
    `original_rate` are captured at construction and identify the debt in
    payoff records.
    """

    principal: float
    annual_rate: float  # decimal, e.g. 0.18 for 18% APR
    periods_per_year: int = 12
    original_principal: float = field(init=False)
    original_rate: float = field(init=False)

    def __post_init__(self) -> None:
        self.original_principal = self.principal
        self.original_rate = self.annual_rate

    def periodic_interest(self) -> float:
        """Interest accrued over one period on the current principal"""
        return self.principal * (self.annual_rate / self.periods_per_year)

    def apply_payment(self, amount: float) -> float:
        """
        Accrue one period of interest, then apply a payment.

        Interest is compounded into principal before the payment is deducted,
        so the interest for a period is always computed on the pre-payment
        balance.

        Returns:
            Excess left over when the payment clears the balance, otherwise 0.0
        """
        self.principal += self.periodic_interest()

        if amount >= self.principal:
            excess = amount - self.principal
            self.principal = 0.0
            return excess

        self.principal -= amount
        return 0.0

    def is_paid_off(self) -> bool:
        return self.principal <= PAID_OFF_TOLERANCE

    def copy(self) -> "Debt":
        """Fresh debt starting from this debt's current balance and rate"""
        return Debt(
            principal=self.principal,
            annual_rate=self.annual_rate,
            periods_per_year=self.periods_per_year,
        )

    def snapshot(self) -> DebtSnapshot:
        return DebtSnapshot(
            original_principal=self.original_principal,
            original_rate=self.original_rate,
            balance=self.principal,
        )
