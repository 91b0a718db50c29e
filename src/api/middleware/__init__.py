"""
API Middleware - exception handlers that shape error responses
"""

from .error_handler import DomainError, PatternNotFoundError, register_exception_handlers

__all__ = ['DomainError', 'PatternNotFoundError', 'register_exception_handlers']
