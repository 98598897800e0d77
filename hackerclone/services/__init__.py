"""Services Layer — ContentStore (persistence) and AuthService (registration, login, authorization).

Invariants:
    - Services receive their collaborators through constructors (see context.py)
    - Services raise core/errors.py types only; the shell decides the HTTP mapping
"""
