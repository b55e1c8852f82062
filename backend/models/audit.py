"""
Audit Log Models
Records of admin actions taken against donors and blood requests.
"""
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional, Any
from enum import Enum
import uuid


class AuditAction(str, Enum):
    LOGIN = "login"
    LOGIN_FAILED = "login_failed"
    DELETE = "delete"
    APPROVE = "approve"


class AuditModule(str, Enum):
    AUTH = "auth"
    DONORS = "donors"
    REQUESTS = "requests"


class AuditLog(BaseModel):
    """Single audit entry. Stored as-is in the audit_logs collection."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    action: AuditAction
    module: AuditModule
    record_id: Optional[str] = None
    record_type: Optional[str] = None
    description: Optional[str] = None
    old_values: Optional[dict] = None
    new_values: Optional[dict] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    request_method: Optional[str] = None
    request_path: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
