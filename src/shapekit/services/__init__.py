"""Service layer: the settings-bound Toolkit facade.

Services may import from domain and config layers.
"""
