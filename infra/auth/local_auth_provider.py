from __future__ import annotations

from domain.models import AuthState, AuthUser
from domain.ports import AuthListener, Unsubscribe
from infra.config import FileSystemConfigProvider


class LocalAuthProvider:
    """
    Auth provider for the command line: the signed-in user lives in
    config.json and sign-in/out rewrite it.

    Listeners are awaited in subscription order on every change.
    """

    def __init__(self, config_provider: FileSystemConfigProvider) -> None:
        self._config_provider = config_provider
        self._listeners: list[AuthListener] = []

    def current_state(self) -> AuthState:
        return AuthState(user=self._config_provider.get_user(), is_loading=False)

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def sign_in(self, user: AuthUser) -> None:
        self._config_provider.set_user(user)
        await self._publish()

    async def sign_out(self) -> None:
        self._config_provider.set_user(None)
        await self._publish()

    async def _publish(self) -> None:
        state = self.current_state()
        for listener in list(self._listeners):
            await listener(state)
