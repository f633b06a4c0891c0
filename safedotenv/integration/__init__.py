# Integration Module
"""
Concurrent batch processing of discovered files with per-file outcomes.
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues."""
    from . import batch
    return getattr(batch, name)

__all__ = [
    'FileOutcome',
    'BatchResult',
    'process',
    'report',
]
