"""Products microservice.

Manages the product catalog (create, paginated listing, lookup, update,
soft-delete and batch existence checks) behind a Redis request/reply RPC
transport.
"""

__version__ = "0.1.0"
