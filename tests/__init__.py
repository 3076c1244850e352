"""
Test suite for the PetClinic application.

This package contains:
- unit/: Handler, binding and model tests against in-memory repositories
- integration/: Page, repository and tracing tests via the Flask test client
- smoke/: Quick checks against a running deployment using requests
- performance/: Locust browsing scenario for load generation
"""
