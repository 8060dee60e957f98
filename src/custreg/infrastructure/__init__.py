"""Infrastructure layer — repository contract, storage, synchronization.

This layer depends on stdlib and the domain layer.
It must never import from services, transport, commands, or output.
"""
