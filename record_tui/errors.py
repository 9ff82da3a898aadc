"""Exceptions shared across modules"""


class PlayerError(Exception):
    """Raised when a stream cannot be started"""
