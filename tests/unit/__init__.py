"""
Unit test package: handlers, binding, validation and models in isolation.
"""
