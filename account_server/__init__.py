"""Minimal user-account service: register, login, logout and token-gated routes."""

__version__ = "0.1.0"
