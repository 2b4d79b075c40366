"""
User-facing notifications
Title/description messages returned alongside API results and errors
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status
from pydantic import BaseModel
from enum import Enum


class NotificationVariant(str, Enum):
    """Notification variant enumeration"""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Message shown to the user after an action"""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


def success(title: str, description: str) -> Notification:
    return Notification(title=title, description=description)


def failure(title: str, description: str) -> Notification:
    return Notification(title=title, description=description, variant=NotificationVariant.DESTRUCTIVE)


class NotificationException(HTTPException):
    """HTTP error carrying a destructive notification for the client"""

    def __init__(
        self,
        status_code: int,
        title: str,
        description: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=description, headers=headers)
        self.notification = failure(title, description)


class SupabaseUnavailableError(NotificationException):
    """Raised when Supabase credentials are not configured"""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            title="Service unavailable",
            description="Supabase client not available"
        )
