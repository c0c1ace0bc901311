"""
Mail module - delivery of generated certificates
"""

from .dispatcher import EmailDispatcher, validate_address

__all__ = ["EmailDispatcher", "validate_address"]
