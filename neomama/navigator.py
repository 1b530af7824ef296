"""Screen navigator: which screen is showing, and how intents move between them.

The navigator owns three pieces of state -- the current ``Screen``, a history
stack used by the generic ``Back`` intent, and the id of the chat the
chat-detail screen should open.  Front ends never set these directly; they
call :meth:`Navigator.dispatch` with one of the intent models from
:mod:`neomama.models`.

Routing after login depends on persisted flags, which are read through an
injected :class:`~neomama.storage.FlagStore`.  The splash screen advances by
itself after a delay; that timer lives on an injected scheduler so tests can
drive time by hand.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from neomama.models import (
    Back,
    BackToAuth,
    BackToChat,
    BackToDashboard,
    BackToWelcome,
    ChatSelect,
    ForgotPassword,
    GetStarted,
    HistoryMode,
    Intent,
    LoginSuccess,
    NavigateTo,
    NavigateWithHistory,
    OnboardingComplete,
    OnboardingSkip,
    ProviderLogin,
    ProviderOnboardingComplete,
    ProviderOnboardingSkip,
    Screen,
    SignOut,
    SplashTimeout,
    UserType,
)
from neomama.storage import TRUE, FlagKey, FlagStore, is_set

log = logging.getLogger(__name__)

SPLASH_DELAY_S = 10.0

BOTTOM_NAV_SCREENS = frozenset(
    {Screen.DASHBOARD, Screen.CALENDAR, Screen.CHAT, Screen.PROFILE}
)

Listener = Callable[[Screen, Screen], None]


# ---------------------------------------------------------------------------
# Timers
# ---------------------------------------------------------------------------


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle: ...


@dataclass(order=True)
class ScheduledCall:
    """A pending callback; ordered by due time, then by scheduling order."""

    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class LoopScheduler:
    """Single-threaded timer queue.

    Nothing fires on its own: the owner calls :meth:`run_pending` from its
    event loop, so callbacks always run on the same thread as every other
    transition.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._queue: list[ScheduledCall] = []
        self._seq = itertools.count()

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self._clock() + delay_s, next(self._seq), callback)
        heapq.heappush(self._queue, call)
        return call

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)

    def time_until_next(self) -> Optional[float]:
        """Seconds until the next live callback is due, or None if idle."""
        self._drop_cancelled()
        if not self._queue:
            return None
        return max(0.0, self._queue[0].due - self._clock())

    def run_pending(self) -> int:
        """Run every callback that is due. Returns how many ran."""
        ran = 0
        now = self._clock()
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0].due > now:
                return ran
            call = heapq.heappop(self._queue)
            call.callback()
            ran += 1


# ---------------------------------------------------------------------------
# Pure routing rules
# ---------------------------------------------------------------------------


def login_destination(flags: FlagStore) -> Screen:
    """Where a successful login lands, given the persisted flags."""
    if flags.get(FlagKey.USER_TYPE) == UserType.PROVIDER.value:
        if is_set(flags.get(FlagKey.HAS_COMPLETED_PROVIDER_ONBOARDING)):
            return Screen.PROVIDER_PORTAL
        return Screen.PROVIDER_ONBOARDING
    if is_set(flags.get(FlagKey.HAS_COMPLETED_ONBOARDING)):
        return Screen.DASHBOARD
    return Screen.ONBOARDING


def bottom_nav_visible(screen: Screen, user_type: Optional[str]) -> bool:
    """The bottom bar shows on the four main screens, and never for providers."""
    return screen in BOTTOM_NAV_SCREENS and user_type != UserType.PROVIDER.value


# ---------------------------------------------------------------------------
# Navigator
# ---------------------------------------------------------------------------


class Navigator:
    """The screen state machine. Start state is ``splash``."""

    def __init__(
        self,
        flags: FlagStore,
        scheduler: Scheduler,
        *,
        splash_delay_s: float = SPLASH_DELAY_S,
        history_mode: HistoryMode = HistoryMode.EXPLICIT,
    ) -> None:
        self.flags = flags
        self.history_mode = history_mode
        self.splash_delay_s = splash_delay_s
        self._scheduler = scheduler
        self._splash_timer: Optional[TimerHandle] = None
        self._listeners: list[Listener] = []
        self._current = Screen.SPLASH
        self.history: list[Screen] = []
        self.selected_chat_id = ""

        self._handlers: dict[type, Callable[[Intent], Screen]] = {
            SplashTimeout: self._on_splash_timeout,
            GetStarted: lambda i: Screen.AUTH,
            BackToWelcome: lambda i: Screen.WELCOME,
            ForgotPassword: lambda i: Screen.PASSWORD_RESET,
            BackToAuth: lambda i: Screen.AUTH,
            LoginSuccess: lambda i: login_destination(self.flags),
            ProviderLogin: self._on_provider_login,
            OnboardingComplete: self._on_onboarding_complete,
            OnboardingSkip: self._on_onboarding_skip,
            ProviderOnboardingComplete: self._on_provider_onboarding_complete,
            ProviderOnboardingSkip: self._on_provider_onboarding_skip,
            NavigateTo: self._on_navigate_to,
            NavigateWithHistory: self._on_navigate_with_history,
            ChatSelect: self._on_chat_select,
            BackToChat: lambda i: Screen.CHAT,
            BackToDashboard: lambda i: Screen.DASHBOARD,
            Back: self._on_back,
            SignOut: lambda i: Screen.AUTH,
        }

        self._arm_splash_timer()

    @property
    def current(self) -> Screen:
        return self._current

    @property
    def user_type(self) -> Optional[str]:
        return self.flags.get(FlagKey.USER_TYPE)

    @property
    def bottom_nav_visible(self) -> bool:
        return bottom_nav_visible(self._current, self.user_type)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener(previous, current)* after every screen change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, intent: Intent) -> Screen:
        """Apply *intent* and return the screen that is now current."""
        handler = self._handlers[type(intent)]
        target = handler(intent)
        self._set_screen(target, intent)
        return self._current

    def close(self) -> None:
        """Tear down: cancel the splash timer and drop listeners."""
        self._cancel_splash_timer()
        self._listeners.clear()

    # -- internals --------------------------------------------------------

    def _set_screen(self, screen: Screen, intent: Intent) -> None:
        previous = self._current
        self._current = screen
        if previous == screen:
            return
        log.debug("%s: %s -> %s", intent.kind, previous.value, screen.value)
        if previous == Screen.SPLASH:
            self._cancel_splash_timer()
        if screen == Screen.SPLASH:
            self._arm_splash_timer()
        for listener in list(self._listeners):
            listener(previous, screen)

    def _arm_splash_timer(self) -> None:
        self._cancel_splash_timer()
        self._splash_timer = self._scheduler.call_later(
            self.splash_delay_s, lambda: self.dispatch(SplashTimeout())
        )

    def _cancel_splash_timer(self) -> None:
        if self._splash_timer is not None:
            log.debug("splash timer cancelled")
            self._splash_timer.cancel()
            self._splash_timer = None

    def _on_splash_timeout(self, intent: Intent) -> Screen:
        self._splash_timer = None
        if self._current != Screen.SPLASH:
            return self._current
        return Screen.WELCOME

    def _on_provider_login(self, intent: Intent) -> Screen:
        self.flags.set(FlagKey.USER_TYPE, UserType.PROVIDER.value)
        if is_set(self.flags.get(FlagKey.HAS_COMPLETED_PROVIDER_ONBOARDING)):
            return Screen.PROVIDER_PORTAL
        return Screen.PROVIDER_ONBOARDING

    def _on_onboarding_complete(self, intent: OnboardingComplete) -> Screen:
        self.flags.set(FlagKey.USER_DATA, intent.user.model_dump_json())
        self.flags.set(FlagKey.HAS_COMPLETED_ONBOARDING, TRUE)
        return Screen.DASHBOARD

    def _on_onboarding_skip(self, intent: Intent) -> Screen:
        self.flags.set(FlagKey.HAS_COMPLETED_ONBOARDING, TRUE)
        return Screen.DASHBOARD

    def _on_provider_onboarding_complete(
        self, intent: ProviderOnboardingComplete
    ) -> Screen:
        self.flags.set(FlagKey.PROVIDER_DATA, intent.provider.model_dump_json())
        self.flags.set(FlagKey.HAS_COMPLETED_PROVIDER_ONBOARDING, TRUE)
        return Screen.PROVIDER_PORTAL

    def _on_provider_onboarding_skip(self, intent: Intent) -> Screen:
        self.flags.set(FlagKey.HAS_COMPLETED_PROVIDER_ONBOARDING, TRUE)
        return Screen.PROVIDER_PORTAL

    def _on_navigate_to(self, intent: NavigateTo) -> Screen:
        if self.history_mode == HistoryMode.ALL and intent.screen != self._current:
            self.history.append(self._current)
        return intent.screen

    def _on_navigate_with_history(self, intent: NavigateWithHistory) -> Screen:
        self.history.append(self._current)
        return intent.screen

    def _on_chat_select(self, intent: ChatSelect) -> Screen:
        self.selected_chat_id = intent.chat_id
        return Screen.CHAT_SCREEN

    def _on_back(self, intent: Intent) -> Screen:
        if self.history:
            return self.history.pop()
        return Screen.DASHBOARD
