"""Domain layer: brands, guards, structural transforms, deep freeze.

This layer depends only on the stdlib. It never logs and never reads
configuration; it must never import from config or services.
"""
