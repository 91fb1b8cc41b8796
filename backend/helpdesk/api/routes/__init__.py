"""Route Modules: one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes run validation -> repository -> transform -> envelope and nothing else
"""
