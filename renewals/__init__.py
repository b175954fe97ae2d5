"""Contract renewal economics: savings, risk and renewal timing for contract portfolios."""

__version__ = "0.4.0"
