"""Core business logic layer.

Subpackages:
- budget: monthly unit aggregation and cap evaluation
- billing: tiered out-of-pocket cost
- reporting: plan summary for display and export
"""
__all__ = ["budget", "billing", "reporting"]
