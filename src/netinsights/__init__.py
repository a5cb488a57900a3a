"""
netinsights: Session insights for network logs.

Aggregates completed network task records into transfer-size totals,
duration statistics, redirect accounting and failure tracking.
"""

__version__ = "0.1.0"
