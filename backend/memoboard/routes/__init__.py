# Routes package init
"""
Memoboard Backend: API Routes Package
=======================================

Route Inventory (JSON, under settings.api_prefix):
    - notes.py:   GET/POST        /notes
                  GET/PUT/DELETE  /notes/{id}
    - todos.py:   GET/POST        /todos
                  GET/PUT/DELETE  /todos/{id}
    - health.py:  GET             /health   (mounted at the root)

Browser pages live in memoboard.ui.pages.

Design Principle:
    Routes are THIN: extract input, call the service, wrap in the envelope.
"""
