"""Service layer — the command interpreter and socket session.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
