"""FastAPI dependency injection — provides the PriorityService singleton."""

from __future__ import annotations

from colony_priority.api.service import PriorityService

_service: PriorityService | None = None


def set_priority_service(service: PriorityService) -> None:
    global _service
    _service = service


def get_priority_service() -> PriorityService:
    if _service is None:
        raise RuntimeError("PriorityService not initialized — server not started correctly.")
    return _service
