"""Infrastructure layer — script persistence and interpreter execution.

This layer depends only on stdlib.
It must never import from domain, services, commands, or output.
"""
