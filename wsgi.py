"""WSGI entry point for the PetClinic application."""

import os

from petclinic import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
