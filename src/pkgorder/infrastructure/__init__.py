"""Infrastructure layer — dependency graph storage and manifest loading.

This layer depends on stdlib and third-party libs (NetworkX, pydantic)
plus the domain error and manifest types.
It must never import from services, commands, or output.
"""
