"""
Shared Kernel

Value objects, domain events, the unit of work and small infrastructure
helpers used by the tenant, room and booking apps.
"""
