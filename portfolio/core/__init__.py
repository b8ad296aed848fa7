"""Core utilities and shared primitives.

Modules in this package should be framework-agnostic where possible and
focused on configuration, validation, HTTP access, and the small element
model the services render into.
"""
