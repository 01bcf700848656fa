"""Domain-level value types and business rules.

Rental snapshots and the fee rule live here, independent from the services
and repositories that apply them.
"""
