"""Rooms app package.

Rooms are the bookable resources of a tenant. Each room carries a capacity
and a typed set of capability flags with an open ``extra_features`` mapping
for attributes that have no dedicated column yet. Availability and booking
endpoints live here but delegate to ``apps.bookings.services``.
"""
