"""MindWell: assessment scoring, trend analysis and report export."""

__version__ = "0.1.0"
