"""Session Gate — проверка доступа к страницам через сервис идентификации.

Порядок проверки check_access(page):
1. Публичная страница → ALLOW
2. Ожидание готовности сервиса идентификации (future с таймаутом).
   Не готов за ready_timeout_sec → REDIRECT_LOGIN
3. get_session():
   - ошибка или нет сессии → ALLOW только при сохранённом признаке входа,
     иначе REDIRECT_LOGIN
   - есть сессия → сохранить признак входа, ALLOW

Готовность сервиса задаётся один раз через mark_ready(identity).
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

from src.core.config import AuthConfig

logger = logging.getLogger(__name__)


class IdentityService(Protocol):
    """Внешний сервис идентификации."""

    def get_session(self) -> Optional[Any]:
        """Текущая сессия или None. Ошибка сервиса поднимается исключением."""

    def sign_out(self) -> None:
        """Завершение сессии."""


class AccessDecision(str, Enum):
    """Решение о доступе к странице."""

    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"


@dataclass(frozen=True)
class AccessResult:
    """Результат проверки доступа."""

    decision: AccessDecision
    reason: str
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.decision == AccessDecision.ALLOW


class SessionCache:
    """Признак входа на время работы клиента (аналог sessionStorage)."""

    def __init__(self):
        self._logged_in = False

    @property
    def logged_in(self) -> bool:
        return self._logged_in

    def mark_logged_in(self) -> None:
        self._logged_in = True

    def clear(self) -> None:
        self._logged_in = False


class SessionGate:
    """Проверка доступа с ожиданием готовности сервиса идентификации."""

    def __init__(self, config: Optional[AuthConfig] = None, cache: Optional[SessionCache] = None):
        self.config = config or AuthConfig()
        self.cache = cache or SessionCache()
        self._identity: Optional[IdentityService] = None
        self._ready: Optional[asyncio.Future] = None

    # -------------------------------------------------------------------------
    # Готовность
    # -------------------------------------------------------------------------

    def _future(self) -> asyncio.Future:
        loop = asyncio.get_running_loop()
        # Future привязан к циклу событий: новый цикл получает новый future
        if self._ready is None or self._ready.get_loop() is not loop:
            self._ready = loop.create_future()
            if self._identity is not None:
                self._ready.set_result(self._identity)
        return self._ready

    def mark_ready(self, identity: IdentityService) -> None:
        """
        Сервис идентификации готов к работе.

        Raises:
            RuntimeError: если готовность уже была задана
        """
        if identity is None:
            raise ValueError("identity must not be None")
        if self._identity is not None:
            raise RuntimeError("identity service is already marked ready")

        self._identity = identity
        ready = self._ready
        if ready is not None and not ready.done() and not ready.get_loop().is_closed():
            ready.get_loop().call_soon_threadsafe(self._resolve, identity)

    def _resolve(self, identity: IdentityService) -> None:
        if self._ready is not None and not self._ready.done():
            self._ready.set_result(identity)

    async def wait_ready(self) -> Optional[IdentityService]:
        """Сервис идентификации или None, если не готов за ready_timeout_sec."""
        try:
            return await asyncio.wait_for(
                asyncio.shield(self._future()), timeout=self.config.ready_timeout_sec
            )
        except asyncio.TimeoutError:
            logger.error(
                "Identity service not ready after %.1fs", self.config.ready_timeout_sec
            )
            return None

    # -------------------------------------------------------------------------
    # Проверка доступа
    # -------------------------------------------------------------------------

    def _redirect(self, reason: str) -> AccessResult:
        return AccessResult(
            decision=AccessDecision.REDIRECT_LOGIN,
            reason=reason,
            redirect_to=self.config.login_page,
        )

    def _fallback(self, reason: str) -> AccessResult:
        if self.cache.logged_in:
            logger.info("Using cached login (%s)", reason)
            return AccessResult(decision=AccessDecision.ALLOW, reason=f"cached_login: {reason}")
        return self._redirect(reason)

    async def check_access(self, page: str) -> AccessResult:
        """
        Решение о доступе к странице.

        Args:
            page: путь или имя страницы ('/app/index.html', 'login.html')
        """
        page_name = page.rsplit("/", 1)[-1]
        if page_name in self.config.public_pages:
            return AccessResult(decision=AccessDecision.ALLOW, reason="public_page")

        identity = await self.wait_ready()
        if identity is None:
            return self._redirect("identity_service_unavailable")

        try:
            session = await asyncio.to_thread(identity.get_session)
        except Exception as exc:
            logger.error("Session check error: %s", exc)
            return self._fallback("session_check_error")

        if not session:
            return self._fallback("no_session")

        self.cache.mark_logged_in()
        return AccessResult(decision=AccessDecision.ALLOW, reason="valid_session")

    async def sign_out(self) -> None:
        """
        Завершение сессии и очистка признака входа.

        Raises:
            RuntimeError: если сервис идентификации не готов
            Exception: ошибка сервиса пробрасывается после логирования
        """
        identity = await self.wait_ready()
        if identity is None:
            raise RuntimeError("identity service is not available")

        try:
            await asyncio.to_thread(identity.sign_out)
        except Exception:
            logger.exception("Sign out failed")
            raise

        self.cache.clear()
        logger.info("Signed out")
