from pydantic import BaseModel
from datetime import datetime
from .enums import AdminRole

class AdminLogin(BaseModel):
    password: str = ""

class TokenResponse(BaseModel):
    token: str

class AdminIdentity(BaseModel):
    role: AdminRole = AdminRole.ADMIN
    issued_at: datetime
    expires_at: datetime
