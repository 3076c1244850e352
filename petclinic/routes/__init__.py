"""
Routes package for the PetClinic application.

This package contains route blueprints:
- api: JSON health endpoint for deployment checks
- views: HTML page routes for owners, pets and visits
"""
