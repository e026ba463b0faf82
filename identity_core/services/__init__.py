"""Services — the identity and session operations, one class per concern.

Invariants:
    - Services raise IdentityCoreError subclasses and never choose status codes
    - Every database call goes through DatabaseGateway; no service holds a connection
"""
