"""Tests for the screen navigator state machine."""

from __future__ import annotations

import pytest

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
    LoginSuccess,
    NavigateTo,
    NavigateWithHistory,
    OnboardingComplete,
    OnboardingSkip,
    ProviderData,
    ProviderLogin,
    ProviderOnboardingComplete,
    ProviderOnboardingSkip,
    Screen,
    SignOut,
    SplashTimeout,
    UserData,
)
from neomama.navigator import (
    SPLASH_DELAY_S,
    LoopScheduler,
    Navigator,
    bottom_nav_visible,
    login_destination,
)
from neomama.storage import TRUE, FlagKey, MemoryFlagStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler(clock: FakeClock) -> LoopScheduler:
    return LoopScheduler(clock=clock)


@pytest.fixture()
def flags() -> MemoryFlagStore:
    return MemoryFlagStore()


@pytest.fixture()
def nav(flags: MemoryFlagStore, scheduler: LoopScheduler):
    navigator = Navigator(flags, scheduler)
    yield navigator
    navigator.close()


def _at(nav: Navigator, screen: Screen) -> Navigator:
    """Put *nav* on *screen* without touching history."""
    nav.dispatch(NavigateTo(screen=screen))
    return nav


class TestLoopScheduler:
    def test_runs_only_when_due(self, clock: FakeClock, scheduler: LoopScheduler) -> None:
        fired: list[str] = []
        scheduler.call_later(5, lambda: fired.append("a"))
        assert scheduler.run_pending() == 0
        clock.advance(5)
        assert scheduler.run_pending() == 1
        assert fired == ["a"]

    def test_cancelled_calls_never_run(self, clock: FakeClock, scheduler: LoopScheduler) -> None:
        fired: list[str] = []
        handle = scheduler.call_later(1, lambda: fired.append("a"))
        handle.cancel()
        clock.advance(2)
        assert scheduler.run_pending() == 0
        assert fired == []
        assert scheduler.time_until_next() is None

    def test_time_until_next(self, clock: FakeClock, scheduler: LoopScheduler) -> None:
        assert scheduler.time_until_next() is None
        scheduler.call_later(3, lambda: None)
        clock.advance(1)
        assert scheduler.time_until_next() == pytest.approx(2.0)
        clock.advance(5)
        assert scheduler.time_until_next() == 0.0

    def test_runs_in_due_order(self, clock: FakeClock, scheduler: LoopScheduler) -> None:
        fired: list[str] = []
        scheduler.call_later(2, lambda: fired.append("late"))
        scheduler.call_later(1, lambda: fired.append("early"))
        clock.advance(3)
        scheduler.run_pending()
        assert fired == ["early", "late"]


class TestSplash:
    def test_starts_on_splash(self, nav: Navigator) -> None:
        assert nav.current == Screen.SPLASH
        assert nav.history == []
        assert nav.selected_chat_id == ""

    def test_timeout_moves_to_welcome(
        self, nav: Navigator, clock: FakeClock, scheduler: LoopScheduler
    ) -> None:
        clock.advance(SPLASH_DELAY_S - 1)
        scheduler.run_pending()
        assert nav.current == Screen.SPLASH
        clock.advance(1)
        scheduler.run_pending()
        assert nav.current == Screen.WELCOME

    def test_timer_cancelled_when_leaving_splash(
        self, nav: Navigator, clock: FakeClock, scheduler: LoopScheduler
    ) -> None:
        nav.dispatch(NavigateTo(screen=Screen.AUTH))
        assert scheduler.time_until_next() is None
        clock.advance(SPLASH_DELAY_S * 2)
        assert scheduler.run_pending() == 0
        assert nav.current == Screen.AUTH

    def test_close_cancels_timer(
        self, nav: Navigator, clock: FakeClock, scheduler: LoopScheduler
    ) -> None:
        nav.close()
        clock.advance(SPLASH_DELAY_S)
        assert scheduler.run_pending() == 0
        assert nav.current == Screen.SPLASH

    def test_late_timeout_is_ignored(self, nav: Navigator) -> None:
        _at(nav, Screen.CALENDAR)
        assert nav.dispatch(SplashTimeout()) == Screen.CALENDAR

    def test_custom_delay(self, flags: MemoryFlagStore, clock: FakeClock) -> None:
        scheduler = LoopScheduler(clock=clock)
        nav = Navigator(flags, scheduler, splash_delay_s=0)
        assert scheduler.time_until_next() == 0.0
        scheduler.run_pending()
        assert nav.current == Screen.WELCOME

    def test_reentering_splash_rearms(
        self, nav: Navigator, clock: FakeClock, scheduler: LoopScheduler
    ) -> None:
        _at(nav, Screen.DASHBOARD)
        nav.dispatch(NavigateTo(screen=Screen.SPLASH))
        clock.advance(SPLASH_DELAY_S)
        scheduler.run_pending()
        assert nav.current == Screen.WELCOME


class TestEntryFlow:
    def test_welcome_auth_reset_loop(self, nav: Navigator) -> None:
        _at(nav, Screen.WELCOME)
        assert nav.dispatch(GetStarted()) == Screen.AUTH
        assert nav.dispatch(ForgotPassword()) == Screen.PASSWORD_RESET
        assert nav.dispatch(BackToAuth()) == Screen.AUTH
        assert nav.dispatch(BackToWelcome()) == Screen.WELCOME

    def test_sign_out_goes_to_auth(self, nav: Navigator) -> None:
        _at(nav, Screen.SETTINGS)
        assert nav.dispatch(SignOut()) == Screen.AUTH


class TestLoginRouting:
    @pytest.mark.parametrize(
        ("stored", "expected"),
        [
            ({}, Screen.ONBOARDING),
            ({FlagKey.HAS_COMPLETED_ONBOARDING: TRUE}, Screen.DASHBOARD),
            ({FlagKey.USER_TYPE: "provider"}, Screen.PROVIDER_ONBOARDING),
            (
                {FlagKey.USER_TYPE: "provider", FlagKey.HAS_COMPLETED_PROVIDER_ONBOARDING: TRUE},
                Screen.PROVIDER_PORTAL,
            ),
        ],
    )
    def test_login_destination(self, stored: dict[str, str], expected: Screen) -> None:
        assert login_destination(MemoryFlagStore(stored)) == expected

    def test_login_success_dispatch(self, flags: MemoryFlagStore, nav: Navigator) -> None:
        flags.set(FlagKey.HAS_COMPLETED_ONBOARDING, TRUE)
        _at(nav, Screen.AUTH)
        assert nav.dispatch(LoginSuccess()) == Screen.DASHBOARD

    def test_empty_flag_counts_as_unset(self) -> None:
        flags = MemoryFlagStore({FlagKey.HAS_COMPLETED_ONBOARDING: ""})
        assert login_destination(flags) == Screen.ONBOARDING

    def test_unknown_user_type_is_mother(self) -> None:
        flags = MemoryFlagStore({FlagKey.USER_TYPE: "garbage"})
        assert login_destination(flags) == Screen.ONBOARDING

    def test_provider_login_writes_user_type(
        self, flags: MemoryFlagStore, nav: Navigator
    ) -> None:
        _at(nav, Screen.AUTH)
        assert nav.dispatch(ProviderLogin()) == Screen.PROVIDER_ONBOARDING
        assert flags.get(FlagKey.USER_TYPE) == "provider"

    def test_provider_login_after_onboarding(
        self, flags: MemoryFlagStore, nav: Navigator
    ) -> None:
        flags.set(FlagKey.HAS_COMPLETED_PROVIDER_ONBOARDING, TRUE)
        _at(nav, Screen.AUTH)
        assert nav.dispatch(ProviderLogin()) == Screen.PROVIDER_PORTAL


class TestOnboarding:
    def test_complete_persists_payload(self, flags: MemoryFlagStore, nav: Navigator) -> None:
        _at(nav, Screen.ONBOARDING)
        user = UserData(name="Amani", location="Kisumu", pregnancy_week=24)
        assert nav.dispatch(OnboardingComplete(user=user)) == Screen.DASHBOARD
        assert flags.get(FlagKey.HAS_COMPLETED_ONBOARDING) == TRUE
        stored = UserData.model_validate_json(flags.get(FlagKey.USER_DATA) or "")
        assert stored == user

    def test_skip_sets_flag_only(self, flags: MemoryFlagStore, nav: Navigator) -> None:
        _at(nav, Screen.ONBOARDING)
        assert nav.dispatch(OnboardingSkip()) == Screen.DASHBOARD
        assert flags.get(FlagKey.HAS_COMPLETED_ONBOARDING) == TRUE
        assert flags.get(FlagKey.USER_DATA) is None

    def test_provider_complete(self, flags: MemoryFlagStore, nav: Navigator) -> None:
        _at(nav, Screen.PROVIDER_ONBOARDING)
        provider = ProviderData(name="Wambui", title="Dr.", facility="Kenyatta")
        assert nav.dispatch(ProviderOnboardingComplete(provider=provider)) == Screen.PROVIDER_PORTAL
        assert flags.get(FlagKey.HAS_COMPLETED_PROVIDER_ONBOARDING) == TRUE
        assert "Kenyatta" in (flags.get(FlagKey.PROVIDER_DATA) or "")

    def test_provider_skip(self, flags: MemoryFlagStore, nav: Navigator) -> None:
        _at(nav, Screen.PROVIDER_ONBOARDING)
        assert nav.dispatch(ProviderOnboardingSkip()) == Screen.PROVIDER_PORTAL
        assert flags.get(FlagKey.HAS_COMPLETED_PROVIDER_ONBOARDING) == TRUE


class TestHistory:
    def test_back_on_empty_history_goes_home(self, nav: Navigator) -> None:
        _at(nav, Screen.TRANSPORT)
        assert nav.dispatch(Back()) == Screen.DASHBOARD
        assert nav.history == []

    def test_navigate_with_history_then_back(self, nav: Navigator) -> None:
        _at(nav, Screen.MENTAL_HEALTH)
        nav.dispatch(NavigateWithHistory(screen=Screen.FOOD))
        assert nav.history == [Screen.MENTAL_HEALTH]
        assert nav.dispatch(Back()) == Screen.MENTAL_HEALTH
        assert nav.history == []

    def test_back_pops_exactly_one(self, nav: Navigator) -> None:
        _at(nav, Screen.DASHBOARD)
        nav.dispatch(NavigateWithHistory(screen=Screen.CALENDAR))
        nav.dispatch(NavigateWithHistory(screen=Screen.PHOTOS))
        nav.dispatch(NavigateWithHistory(screen=Screen.FOOD))
        assert len(nav.history) == 3
        nav.dispatch(Back())
        assert nav.current == Screen.PHOTOS
        assert nav.history == [Screen.DASHBOARD, Screen.CALENDAR]

    def test_navigate_to_does_not_push_by_default(self, nav: Navigator) -> None:
        _at(nav, Screen.DASHBOARD)
        nav.dispatch(NavigateTo(screen=Screen.HOSPITALS))
        assert nav.history == []

    def test_all_mode_pushes_forward_jumps(
        self, flags: MemoryFlagStore, scheduler: LoopScheduler
    ) -> None:
        nav = Navigator(flags, scheduler, history_mode=HistoryMode.ALL)
        nav.dispatch(BackToDashboard())
        nav.dispatch(NavigateTo(screen=Screen.HOSPITALS))
        nav.dispatch(NavigateTo(screen=Screen.HOSPITALS))
        assert nav.history == [Screen.DASHBOARD]
        assert nav.dispatch(Back()) == Screen.DASHBOARD
        nav.close()

    def test_back_to_dashboard_leaves_history(self, nav: Navigator) -> None:
        _at(nav, Screen.DASHBOARD)
        nav.dispatch(NavigateWithHistory(screen=Screen.FOOD))
        nav.dispatch(BackToDashboard())
        assert nav.history == [Screen.DASHBOARD]


class TestChat:
    def test_select_sets_id_and_opens_detail(self, nav: Navigator) -> None:
        _at(nav, Screen.CHAT)
        assert nav.dispatch(ChatSelect(chat_id="42")) == Screen.CHAT_SCREEN
        assert nav.selected_chat_id == "42"

    def test_back_to_chat_keeps_id(self, nav: Navigator) -> None:
        _at(nav, Screen.CHAT)
        nav.dispatch(ChatSelect(chat_id="3"))
        assert nav.dispatch(BackToChat()) == Screen.CHAT
        assert nav.selected_chat_id == "3"


class TestBottomNav:
    @pytest.mark.parametrize("screen", list(Screen))
    def test_visibility_rule(self, screen: Screen) -> None:
        main = screen in {Screen.DASHBOARD, Screen.CALENDAR, Screen.CHAT, Screen.PROFILE}
        assert bottom_nav_visible(screen, None) is main
        assert bottom_nav_visible(screen, "mother") is main
        assert bottom_nav_visible(screen, "provider") is False

    def test_navigator_property(self, flags: MemoryFlagStore, nav: Navigator) -> None:
        _at(nav, Screen.DASHBOARD)
        assert nav.bottom_nav_visible
        flags.set(FlagKey.USER_TYPE, "provider")
        assert not nav.bottom_nav_visible


class TestListeners:
    def test_notified_on_change(self, nav: Navigator) -> None:
        seen: list[tuple[Screen, Screen]] = []
        nav.subscribe(lambda prev, cur: seen.append((prev, cur)))
        nav.dispatch(NavigateTo(screen=Screen.WELCOME))
        nav.dispatch(GetStarted())
        assert seen == [(Screen.SPLASH, Screen.WELCOME), (Screen.WELCOME, Screen.AUTH)]

    def test_not_notified_when_unchanged(self, nav: Navigator) -> None:
        seen: list[tuple[Screen, Screen]] = []
        _at(nav, Screen.DASHBOARD)
        nav.subscribe(lambda prev, cur: seen.append((prev, cur)))
        nav.dispatch(BackToDashboard())
        assert seen == []

    def test_unsubscribe(self, nav: Navigator) -> None:
        seen: list[tuple[Screen, Screen]] = []
        unsubscribe = nav.subscribe(lambda prev, cur: seen.append((prev, cur)))
        unsubscribe()
        unsubscribe()
        nav.dispatch(NavigateTo(screen=Screen.AUTH))
        assert seen == []


class TestClosedWorld:
    def test_every_intent_lands_on_a_screen(self, nav: Navigator) -> None:
        intents = [
            SplashTimeout(), GetStarted(), ForgotPassword(), BackToAuth(),
            BackToWelcome(), LoginSuccess(), ProviderLogin(), OnboardingSkip(),
            ProviderOnboardingSkip(), NavigateTo(screen=Screen.FOOD),
            NavigateWithHistory(screen=Screen.VITALS), ChatSelect(chat_id="1"),
            BackToChat(), BackToDashboard(), Back(), Back(), SignOut(),
        ]
        for intent in intents:
            assert isinstance(nav.dispatch(intent), Screen)

    def test_unknown_screen_rejected(self) -> None:
        with pytest.raises(ValueError):
            Screen("nowhere")
