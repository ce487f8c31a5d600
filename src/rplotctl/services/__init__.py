"""Service layer — plot documents and chart operations.

Services may import from domain, config, and infrastructure layers.
They must never import from commands or output.
"""
