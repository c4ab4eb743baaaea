"""Bookings app package.

This app encapsulates the reservation domain: the reservation model, the
overlap oracle, the atomic booking transaction and the availability and
booking queries built on it. Bookings stay conflict-free through a per-room
lock around a database transaction, backed on PostgreSQL by an exclusion
constraint over the reservation interval.
"""
