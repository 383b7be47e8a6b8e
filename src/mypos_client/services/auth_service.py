from __future__ import annotations

import logging

from ..exceptions import ApiError
from ..models import LoginResponse, UserResponse
from ..session import ApiSession

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated()

    def current_user(self) -> UserResponse | None:
        return self.session.user

    def login(self, username: str, password: str) -> LoginResponse:
        logger.info("login_attempt", extra={"username": username})
        try:
            response = self.session.auth_client().login(username, password)
        except Exception:
            logger.exception("login_failure", extra={"username": username})
            raise
        self.session.establish(response.token, response.info)
        logger.info("login_success", extra={"username": username, "user_id": response.info.id})
        return response

    def logout(self) -> None:
        logger.info("logout")
        if self.session.token:
            try:
                self.session.auth_client().logout()
            except ApiError as exc:
                logger.warning("logout_remote_failed", extra={"error_code": exc.code})
        self.session.clear()
