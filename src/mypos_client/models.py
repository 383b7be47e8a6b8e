from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    username: str
    email: str | None = None
    company_id: int | None = None
    company_name: str | None = None
    company_plan: str | None = None
    role_name: str | None = None


class LoginRequest(BaseModel):
    username: str
    password: str
    ip_connection: str


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: int | None = None
    message: str | None = None
    token: str
    info: UserResponse


class SessionData(BaseModel):
    token: str
    user: Optional[UserResponse] = None
    env_name: str | None = None
