"""Infrastructure layer — path sandboxing, atomic writes, sidecars, the Vault.

This layer may import from domain (errors, layout constants, models).
It must never import from services, commands, or output.
"""
