from .errors import (
    ServiceError, ValidationError, AuthError, NotFoundError,
    PersistenceError, NotificationError
)
from .stores import DonorStore, RequestStore
from .matching import MatchingEngine, DEFAULT_MATCH_LIMIT
from .inventory import InventoryAggregator
from .notifications import (
    NotificationDispatcher, EmailChannel, SmsChannel, build_channels, build_message
)
from .admin_gate import AdminGate
from .audit_service import AuditService
from .intake import RequestIntake, IntakeResult
