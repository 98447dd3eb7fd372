"""
Task Tracker backend package.

An in-memory task store served through a single keyword-dispatched
query endpoint. The FastAPI app lives in ``task_tracker.main``.
"""

__version__ = "0.1.0"
