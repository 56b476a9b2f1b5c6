"""
Memoboard UI Package
======================

Browser-facing screens built on the client facade:
    - views:  view models (state + actions, no HTML)
    - pages:  FastAPI router serving the screens and their form actions,
              rendering the Jinja2 templates in memoboard/templates
"""
