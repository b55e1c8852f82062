"""
Audit Logging Service
Records admin actions in the audit_logs collection.
"""
import logging
from typing import Optional

from fastapi import Request
from pymongo.errors import PyMongoError

from models.audit import AuditLog, AuditAction, AuditModule

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = {
    "password", "password_hash", "token", "secret", "api_key",
    "admin_key", "jwt_secret", "authorization",
}


class AuditService:
    """Writes audit entries for admin actions."""

    def __init__(self, db):
        self.collection = db.audit_logs

    async def log(
        self,
        action: AuditAction,
        module: AuditModule,
        record_id: Optional[str] = None,
        record_type: Optional[str] = None,
        description: Optional[str] = None,
        old_values: Optional[dict] = None,
        new_values: Optional[dict] = None,
        request: Optional[Request] = None,
        metadata: Optional[dict] = None
    ) -> Optional[str]:
        """
        Create an audit log entry.

        Args:
            action: The action being performed
            module: The module where action occurred
            record_id: ID of the affected record
            record_type: Type of record (e.g., "donor", "blood_request")
            description: Human-readable description
            old_values: Previous values (for deletes/updates)
            new_values: New values (for updates)
            request: FastAPI request object for IP/user-agent
            metadata: Additional metadata

        Returns:
            ID of created audit log, or None when the entry could not be stored
        """
        ip_address = None
        user_agent = None
        request_method = None
        request_path = None

        if request:
            ip_address = request.client.host if request.client else None
            user_agent = request.headers.get("user-agent", "")[:500]
            request_method = request.method
            request_path = str(request.url.path)

        audit_log = AuditLog(
            action=action,
            module=module,
            record_id=record_id,
            record_type=record_type,
            description=description,
            old_values=self.clean_sensitive_data(old_values),
            new_values=self.clean_sensitive_data(new_values),
            ip_address=ip_address,
            user_agent=user_agent,
            request_method=request_method,
            request_path=request_path,
            metadata=self.clean_sensitive_data(metadata),
        )

        doc = audit_log.model_dump(mode="json")
        try:
            await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to write audit log for %s %s: %s", action.value, record_id, e)
            return None

        return audit_log.id

    @classmethod
    def clean_sensitive_data(cls, data: Optional[dict]) -> Optional[dict]:
        """Redact sensitive fields from audit data."""
        if not data:
            return None

        cleaned = {}
        for key, value in data.items():
            if key.lower() in SENSITIVE_FIELDS:
                cleaned[key] = "[REDACTED]"
            elif isinstance(value, dict):
                cleaned[key] = cls.clean_sensitive_data(value)
            else:
                cleaned[key] = value

        return cleaned

    async def log_auth(self, success: bool, request: Optional[Request] = None, details: Optional[str] = None):
        """Log an admin login attempt."""
        action = AuditAction.LOGIN if success else AuditAction.LOGIN_FAILED
        return await self.log(
            action, AuditModule.AUTH,
            description=details or f"{'Successful' if success else 'Failed'} admin login",
            request=request,
            metadata={"success": success},
        )

    async def log_delete(self, module: AuditModule, record_id: str, record_type: str,
                         old_values: Optional[dict] = None, request: Optional[Request] = None):
        """Log a DELETE action."""
        return await self.log(
            AuditAction.DELETE, module,
            record_id=record_id, record_type=record_type,
            old_values=old_values,
            description=f"Deleted {record_type} {record_id}",
            request=request,
        )

    async def log_approve(self, record_id: str, old_status: Optional[str], request: Optional[Request] = None):
        """Log a request approval."""
        return await self.log(
            AuditAction.APPROVE, AuditModule.REQUESTS,
            record_id=record_id, record_type="blood_request",
            old_values={"status": old_status},
            new_values={"status": "Approved"},
            description=f"Approved blood_request {record_id}",
            request=request,
        )
