"""
Soccer scoreboard aggregating ESPN scores with live moneyline odds.
"""

__version__ = "0.1.0"
