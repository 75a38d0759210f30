# loyalty/services/exceptions.py

"""
LOYALTY SERVICE ERRORS

Centralized domain errors for points redemption and settlement.
"""


class LoyaltyError(Exception):
    """Base exception for all loyalty service failures."""


class RedemptionError(LoyaltyError):
    """Raised when a points redemption request cannot be honoured."""


class InsufficientBalanceError(RedemptionError):
    """Raised when a redemption exceeds (or cannot be checked against) the balance."""


class BelowMinimumRedemptionError(RedemptionError):
    """Raised when fewer than one redemption unit (100 points) is requested."""


class SettlementError(LoyaltyError):
    """Raised when the balance update or ledger rows cannot be written."""
