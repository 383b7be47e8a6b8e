from __future__ import annotations

from ..envelope import parse_model
from ..models import LoginRequest, LoginResponse
from .base import BaseClient

LOGIN_PATH = "/api/user/login"
LOGOUT_PATH = "/api/user/logout"


class AuthClient(BaseClient):
    def login(self, username: str, password: str) -> LoginResponse:
        payload = LoginRequest(
            username=username,
            password=password,
            ip_connection=self.http.device_address(),
        )
        data = self.http.request(
            "POST",
            LOGIN_PATH,
            json_body=payload.model_dump(),
            module="auth",
            operation="login",
        )
        return parse_model(data, LoginResponse, operation="login")

    def logout(self) -> None:
        self._request("POST", LOGOUT_PATH, module="auth", operation="logout")
