"""Infrastructure layer — message pool and the socket-backed transport.

This layer depends on stdlib (``socket``, ``asyncio``) and the domain
error taxonomy. It must never import from services, commands, or output.
"""
