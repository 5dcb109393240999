"""Bookings app package.

This app encapsulates the rental booking lifecycle: the booking model,
the status state machine, pricing and the availability conflict check.
Requests that extend the set of bookings holding an equipment lock the
equipment row inside a database transaction, so approved rentals of the
same item never overlap.
"""
