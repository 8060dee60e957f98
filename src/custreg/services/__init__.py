"""Service layer — business orchestration returning ServiceResult.

Services may import from domain and infrastructure layers.
They must never import from transport, commands, or output.
"""
