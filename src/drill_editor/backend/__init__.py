"""
Drill storage backend and transcode status polling.
"""

from .client import BackendError, DrillBackend, HttpDrillBackend

__all__ = ["BackendError", "DrillBackend", "HttpDrillBackend"]
