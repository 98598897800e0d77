"""Infrastructure Layer — database pool, credential hashing, session signing, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Third-party failures are mapped to core/errors.py types before leaving this layer
"""
