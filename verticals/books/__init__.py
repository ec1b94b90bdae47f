"""Books vertical: CRUD over the single `books` table.

- SQLAlchemy model keyed by isbn
- Pure-function validation rules
- Async store with one atomic statement per operation
- FastAPI router mapping store outcomes to HTTP responses
"""
