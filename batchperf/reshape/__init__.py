"""
Result reshaping: raw App Insights metric bodies into chart-ready series.
"""

from .processor import SegmentProcessor
from .reshaper import reshape

__all__ = ["SegmentProcessor", "reshape"]
