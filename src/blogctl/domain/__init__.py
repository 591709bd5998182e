"""Domain layer — records, content rules, and display formatting.

This layer depends only on stdlib, pydantic, ruamel.yaml, and markupsafe.
It must never import from services, infrastructure, commands, or config.
"""
