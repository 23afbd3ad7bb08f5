"""Domain layer — vault layout, naming rules, errors, and record models.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
