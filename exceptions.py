"""
Custom exceptions for the traversal visualizer.

Graph edits, traversal runs and playback commands never raise for normal
input; these cover caller mistakes at the API boundary.
"""


class VisualizerError(Exception):
    """Base exception for all visualizer errors."""
    pass


class UnknownAlgorithmError(VisualizerError, ValueError):
    """Raised when an algorithm key is not in the registry."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown algorithm: {key}")


class InvalidRequestError(VisualizerError):
    """Raised when an HTTP payload is missing fields or has the wrong types."""
    pass
