"""Insights aggregation over network task records."""

from netinsights.insights.aggregator import NetworkInsights, construct, insert
from netinsights.insights.duration import DurationStats
from netinsights.insights.failures import FailureStats
from netinsights.insights.redirects import RedirectStats
from netinsights.insights.session import InsightsSession

__all__ = [
    "DurationStats",
    "FailureStats",
    "InsightsSession",
    "NetworkInsights",
    "RedirectStats",
    "construct",
    "insert",
]
