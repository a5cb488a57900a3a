# tests/property/__init__.py
"""Property-based tests for netinsights.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of:
- Aggregation is order-independent for the sorted duration values
- Insert and construct agree
- The session never publishes a stale snapshot
"""
