"""
Integration test package for the PetClinic web pages.

Tests use the Flask test client against an in-memory SQLite database
and demonstrate:
- HTML form submission testing
- Redirect and flash message validation
- Error page and health endpoint testing
- Span assertions with an in-memory exporter
"""
