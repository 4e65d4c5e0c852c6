"""Validation helpers, credential configuration, secret encryption and terminal views for a Harbor registry client."""

__version__ = "0.1.0"