"""Infrastructure layer — database, repositories, and the store.

Depends on domain. Never imports from services, commands, or config
at module level.
"""
