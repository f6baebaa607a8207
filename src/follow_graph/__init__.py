"""Reciprocity, activity and sorting analysis over exported follower data."""

__version__ = "0.1.0"
