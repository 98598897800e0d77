"""HackerClone — link sharing and threaded discussion core.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
