"""
Review Report - Review Analysis charts from review snapshots

Turns a flat list of review records (publisher, location, date, rating) into:
1. Per-publisher totals and provider metadata
2. A shared chronological date axis
3. Average-rating series per publisher and per premise (on / off / any)
4. Plotly figures and HTML legends for the report page

Usage:
    from review_report import ReviewAnalysisReport, ReviewStore
    from review_report.transformers import group_by_publisher, build_axis
"""

__version__ = "1.0.0"
__author__ = "Myriam Rahali"

# Make key modules available at package level
from . import config
from . import providers
from .store import ReviewStore
from .report import ReviewAnalysisReport

__all__ = [
    "config",
    "providers",
    "ReviewStore",
    "ReviewAnalysisReport",
    "__version__",
]
