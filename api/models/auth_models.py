# File: api/models/auth_models.py
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class GoogleLoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    name: Optional[str] = None
    google_id: Optional[str] = Field(default=None, alias="googleId")
    avatar: Optional[str] = None


class ProfilePreferencesRequest(BaseModel):
    language: Optional[str] = None
    categories: Optional[List[str]] = None


class HistoryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    article_id: str = Field(alias="articleId")
    title: Optional[str] = None
    url: Optional[str] = None


class SubscriptionRequest(BaseModel):
    plan: str
