"""
Balance Ledger - Per-Cycle Stake/Reward Cash Flow

The stake for a cycle's reviews is reserved and refunded in full within
the same cycle, so an affordable cycle nets out to `balance += reward`.
The requirement only gates whether the cycle may run at all.
"""

from reviewsim.core.exceptions import InsufficientBalance


class BalanceLedger:

    def __init__(self, base_stake: float, reviews_per_cycle: int):
        self.base_stake = base_stake
        self.reviews_per_cycle = reviews_per_cycle

    @property
    def stake_requirement(self) -> float:
        return self.base_stake * self.reviews_per_cycle

    def can_afford(self, balance: float) -> bool:
        return balance >= self.stake_requirement

    def settle(self, balance: float, reward: float, cycle: int = 0) -> float:
        self.require(balance, cycle)
        return balance + reward

    def settle_with_reserve(self, balance: float, reward: float, cycle: int = 0) -> float:
        """Literal reserve -> credit -> refund sequence; same result as settle()."""
        self.require(balance, cycle)
        requirement = self.stake_requirement
        balance -= requirement
        balance += reward
        balance += requirement
        return balance

    def require(self, balance: float, cycle: int) -> None:
        if not self.can_afford(balance):
            raise InsufficientBalance(
                f"Insufficient balance for stakes: {balance} < {self.stake_requirement}",
                cycle=cycle,
                details={"balance": balance, "required": self.stake_requirement},
            )
