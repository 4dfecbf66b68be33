"""API Layer — FastAPI routes and the fault boundary.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes talk to the BookStore and ViewRenderer protocols only
"""
