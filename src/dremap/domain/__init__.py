"""Domain layer for dremap application."""

__all__ = [
    "MappingService",
    "MovementService",
    "UnmappedService",
    "ReconciliationService",
]

_SERVICES = {
    "MappingService": "dremap.domain.mapping",
    "MovementService": "dremap.domain.movement",
    "UnmappedService": "dremap.domain.unmapped",
    "ReconciliationService": "dremap.domain.reconciliation",
}


# Import services lazily to avoid circular imports with the database layer
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
