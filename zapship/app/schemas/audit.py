"""
Audit trail Pydantic schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from zapship.app.schemas.base import CamelModel


class AuditLogResponse(CamelModel):
    id: int
    action: str
    actor_email: Optional[str]
    subject_type: Optional[str]
    subject_id: Optional[str]
    meta_data: Optional[Dict[str, Any]]
    timestamp: datetime


class AuditTrailResponse(CamelModel):
    logs: List[AuditLogResponse]
    total: int
