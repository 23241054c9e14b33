"""Bookings app package.

Room stays and surf week bookings, their pricing, availability checks,
payment hold expiry and guest notifications. Writes that depend on an
availability check run in one transaction with the inspected rows locked.
"""
