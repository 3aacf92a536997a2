"""BP Log - personal blood pressure tracker."""

__version__ = "0.1.0"
