"""
API Dependencies - Pattern engine access for FastAPI endpoints

Pattern:
1. main_asyncio.py creates the PatternEngine during initialization
2. main_asyncio.py calls set_engine() after creation
3. API endpoints use get_engine() dependency via Depends()

Example:
    @router.get("/patterns")
    async def list_patterns(engine: PatternEngine = Depends(get_engine)):
        return engine.list_patterns()
"""

from typing import Optional
from fastapi import HTTPException, status
from engine.pattern_engine import PatternEngine


# Global engine (set by main_asyncio.py during initialization)
_engine: Optional[PatternEngine] = None


def set_engine(engine: Optional[PatternEngine]) -> None:
    """
    Store the pattern engine for API access.

    Args:
        engine: The running PatternEngine, or None to detach it
    """
    global _engine
    _engine = engine


async def get_engine() -> PatternEngine:
    """
    FastAPI dependency for accessing the pattern engine.

    Raises:
        HTTPException: 503 Service Unavailable if the engine is not initialized
    """
    if _engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Pattern engine not initialized. LED controller may still be starting."
        )
    return _engine
