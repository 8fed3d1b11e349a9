"""Bookings app package.

This app encapsulates the booking domain: the booking model, the
availability check that guards new and changed bookings, price
calculation, the customer upsert performed while booking and the
periodic task that completes finished trips.
"""
