"""
Email credential model - persisted by config.credentials_store
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EmailCredentials(BaseModel):
    """Mail account identifier and secret"""
    username: str = ""
    password: str = ""

    @property
    def is_configured(self) -> bool:
        """Empty values mean no email account is configured"""
        return bool(self.username and self.password)


class AppConfig(BaseModel):
    """User-editable application settings document"""
    email: EmailCredentials = Field(default_factory=EmailCredentials)
