# Infrastructure Package
"""
Concrete collaborators: embedding service, catalog provider, preference store.
"""
