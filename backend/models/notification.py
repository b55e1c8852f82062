from pydantic import BaseModel
from enum import Enum

class NotificationChannelType(str, Enum):
    EMAIL = "email"
    SMS = "sms"

class NotificationMessage(BaseModel):
    subject: str
    email_body: str
    sms_body: str
