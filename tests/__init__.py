# tests/__init__.py
"""
Test suite for the E-commerce API.

Organization:
- `core`: validation schemas, filter predicates and pagination, exercised
  directly (with an in-memory SQLite session where rows are needed).
- `http_api`: endpoint tests through FastAPI's TestClient against a seeded
  in-memory database.
"""
