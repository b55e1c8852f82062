from .enums import BloodGroup, RequestStatus, AdminRole
from .base import ApiModel
from .user import AdminLogin, TokenResponse, AdminIdentity
from .donor import Donor, DonorCreate, DonorRegistered, MIN_DONOR_AGE, MAX_DONOR_AGE
from .request import BloodRequest, BloodRequestCreate, RequestSubmitted, MIN_UNITS, MAX_UNITS
from .notification import NotificationChannelType, NotificationMessage
from .audit import AuditLog, AuditAction, AuditModule
