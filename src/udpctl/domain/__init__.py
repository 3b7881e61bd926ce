"""Domain layer — argument parsing, payload encodings, error taxonomy.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
