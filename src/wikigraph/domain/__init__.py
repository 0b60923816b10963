"""Domain layer — reference parsing, naming rules, and result records.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
