"""Audit log schemas."""
from datetime import datetime
from typing import Optional, Any, Dict
from pydantic import BaseModel, ConfigDict
from adcert.schemas.user import UserBrief


class AuditLogResponse(BaseModel):
    log_id: int
    entity_type: str
    entity_id: int
    action: str
    user_id: Optional[int] = None
    changes: Optional[Dict[str, Any]] = None
    timestamp: datetime
    user: Optional[UserBrief] = None

    model_config = ConfigDict(from_attributes=True)
