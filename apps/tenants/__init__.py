"""Tenants app package.

A tenant is the isolation boundary of the platform: it owns rooms and,
through them, reservations. Tenants are provisioned administratively
(Django admin or the ``seed_demo_data`` command) and are read-only for
the booking core. API requests identify their tenant with the
``Tenant-Id`` header, see ``apps.tenants.mixins``.
"""
