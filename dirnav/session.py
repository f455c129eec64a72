"""Per-shell-session context wiring store, controller, and observer.

One ``HistorySession`` is owned by one interactive shell. The history
document is only read when something first needs the store.
"""

from __future__ import annotations

from .config import Settings, resolve_settings
from .history import HistoryStore
from .navigation import NavigationController, Relocator, change_directory
from .observer import CommandCompletionHook, LocationChangeObserver


class HistorySession:
    """Explicit owner of one session's directory history."""

    def __init__(
        self,
        settings: Settings | None = None,
        relocate: Relocator = change_directory,
        hook: CommandCompletionHook | None = None,
    ) -> None:
        """Create the session; ``hook`` is subscribed to the location observer when given."""
        self.settings = settings if settings is not None else resolve_settings()
        self._relocate = relocate
        self._store: HistoryStore | None = None
        self._controller: NavigationController | None = None
        self.observer = LocationChangeObserver(lambda: self.store)
        self.hook = hook
        if hook is not None:
            hook.subscribe(self.observer.notify)

    @property
    def loaded(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> HistoryStore:
        if self._store is None:
            self._store = HistoryStore.load(
                self.settings.history_path,
                max_entries=self.settings.max_entries,
            )
        return self._store

    @property
    def navigation(self) -> NavigationController:
        if self._controller is None:
            self._controller = NavigationController(
                self.store,
                relocate=self._relocate,
                before_relocate=self.observer.expect,
                relocation_failed=self.observer.forget,
            )
        return self._controller

    def command_completed(self, cwd: str) -> bool:
        """Feed one post-command working directory to the observer."""
        return self.observer.notify(cwd)

    def close(self) -> None:
        """Detach from the host hook; history is already persisted."""
        if self.hook is not None:
            self.hook.unsubscribe()
            self.hook = None
