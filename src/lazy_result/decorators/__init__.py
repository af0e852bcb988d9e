"""Decorators for lifting plain async functions into TaskResult factories."""

from lazy_result.decorators.service import service

__all__ = ['service']
