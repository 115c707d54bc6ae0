"""Core business logic layer.

Subpackages:
- targets: daily and per-slot macro targets from a profile
- planning: day-plan assembly, random baseline, meal swapping
- shopping: ingredient aggregation and pack-format shopping lists
- reporting: plan quality and nutrition summaries
"""
__all__ = ["targets", "planning", "shopping", "reporting"]
