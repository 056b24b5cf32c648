"""Services for scheduling logic.

Modules:
- timeplan: time-string parsing, shift hours and cost
- candidates: hard eligibility filter for one requirement
- scoring: suitability and confidence scores
- conflicts: append-only conflict log
- validation: post-plan audit and text summary
- metrics: aggregate schedule metrics
- recommendations: advisory strings from metrics and conflicts
- loaders: database-backed requirement/availability loaders
"""

__all__ = [
    "timeplan",
    "candidates",
    "scoring",
    "conflicts",
    "validation",
    "metrics",
    "recommendations",
    "loaders",
]
