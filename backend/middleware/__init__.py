"""
Middleware package for the blood donation API.
"""
from .admin_access import require_admin

__all__ = [
    'require_admin',
]
