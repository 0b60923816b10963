"""Infrastructure layer — document store, locking, resolution, indices, graph.

This layer depends on stdlib, the domain layer, and NetworkX.
It must never import from services, commands, or output.
The service layer bridges between infrastructure and the outside world.
"""
