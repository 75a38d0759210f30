"""
Loyalty services.

- rules:      pure points math (tiers, earn, redemption preview)
- ledger:     balance reads and the settle() write path
- exceptions: domain errors
"""
