"""
Shared Kernel

This module contains base classes and utilities shared across all apps:
value objects for the booking calendar and the REST API plumbing (error
handling, pagination) used by every viewset.
"""
