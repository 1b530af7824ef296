"""What each screen is called and which intents it may send.

Screens have no navigation authority of their own: a front end asks
:func:`actions_for` which intents the current screen offers, shows them,
and hands the chosen one to :meth:`Navigator.dispatch`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from neomama.chat import CHATS
from neomama.models import (
    Back,
    BackToAuth,
    BackToChat,
    BackToDashboard,
    BackToWelcome,
    Chat,
    ChatSelect,
    ForgotPassword,
    GetStarted,
    HistoryMode,
    Intent,
    LoginSuccess,
    NavigateTo,
    OnboardingSkip,
    ProviderLogin,
    ProviderOnboardingSkip,
    Screen,
    SignOut,
)

SCREEN_TITLES: dict[Screen, str] = {
    Screen.SPLASH: "NeoMama",
    Screen.WELCOME: "Welcome",
    Screen.AUTH: "Sign In",
    Screen.PASSWORD_RESET: "Reset Password",
    Screen.ONBOARDING: "Tell Us About You",
    Screen.PROVIDER_ONBOARDING: "Provider Registration",
    Screen.DASHBOARD: "Home",
    Screen.CALENDAR: "Calendar",
    Screen.HOSPITALS: "Hospitals Near You",
    Screen.CHAT: "NeoMama Community",
    Screen.CHAT_SCREEN: "Conversation",
    Screen.PROFILE: "My Profile",
    Screen.PHOTOS: "Photo Journal",
    Screen.FOOD: "Food & Nutrition",
    Screen.BABY_TRACKER: "Baby Tracker",
    Screen.MARKETPLACE: "Ubuntu Marketplace",
    Screen.SYMPTOMS: "Symptom Tracker",
    Screen.MENTAL_HEALTH: "Mental Health Check",
    Screen.EMERGENCY: "Emergency Guide",
    Screen.ARTICLES_VIDEOS: "Articles & Videos",
    Screen.SETTINGS: "Settings",
    Screen.BUDDY_SYSTEM: "Pregnancy Buddy",
    Screen.CONTRACTIONS: "Contraction Monitor",
    Screen.TRANSPORT: "Emergency Transport",
    Screen.CHILDCARE: "Childcare Services",
    Screen.AI_ASSISTANT: "Pregnancy Assistant",
    Screen.PROVIDER_PORTAL: "Provider Portal",
    Screen.MEDICATIONS: "Medication Reminders",
    Screen.COMPLICATIONS: "Complications Support",
    Screen.VITALS: "Vitals Tracking",
    Screen.EMERGENCY_ALERT: "Emergency Alert",
    Screen.BIRTH_PREPAREDNESS: "Birth Preparedness",
    Screen.AI_RISK: "Risk Prediction",
    Screen.VOICE_NAV: "Voice Navigation",
    Screen.CHW_PORTAL: "Community Health Worker Portal",
    Screen.APPOINTMENTS: "Appointments",
    Screen.GAMIFIED_EDU: "Learn & Earn",
    Screen.BIRTH_CERT: "Digital Birth Certificate",
    Screen.DELIVERY_PLAN: "Delivery Plan",
    Screen.WEARABLES: "Wearables",
    Screen.IMPACT: "Impact Tracker",
    Screen.CHATBOT: "Multilingual Chatbot",
}

# Screens reachable from the dashboard, in the order the dashboard lists them.
DASHBOARD_DESTINATIONS: list[Screen] = [
    Screen.CALENDAR,
    Screen.HOSPITALS,
    Screen.CHAT,
    Screen.PROFILE,
    Screen.PHOTOS,
    Screen.FOOD,
    Screen.BABY_TRACKER,
    Screen.MARKETPLACE,
    Screen.SYMPTOMS,
    Screen.MENTAL_HEALTH,
    Screen.EMERGENCY,
    Screen.CONTRACTIONS,
    Screen.TRANSPORT,
    Screen.CHILDCARE,
    Screen.SETTINGS,
    Screen.AI_ASSISTANT,
    Screen.PROVIDER_PORTAL,
    Screen.BUDDY_SYSTEM,
    Screen.ARTICLES_VIDEOS,
    Screen.MEDICATIONS,
    Screen.COMPLICATIONS,
    Screen.VITALS,
    Screen.EMERGENCY_ALERT,
    Screen.BIRTH_PREPAREDNESS,
    Screen.AI_RISK,
    Screen.VOICE_NAV,
    Screen.CHW_PORTAL,
    Screen.APPOINTMENTS,
    Screen.GAMIFIED_EDU,
    Screen.BIRTH_CERT,
    Screen.DELIVERY_PLAN,
    Screen.WEARABLES,
    Screen.IMPACT,
    Screen.CHATBOT,
]

BOTTOM_NAV_ITEMS: list[tuple[str, Screen]] = [
    ("Home", Screen.DASHBOARD),
    ("Calendar", Screen.CALENDAR),
    ("Chat", Screen.CHAT),
    ("Profile", Screen.PROFILE),
]


@dataclass(frozen=True)
class ScreenAction:
    """One choice a screen offers.

    ``intent`` is None when the front end must collect a payload first;
    ``payload`` then names what to collect (``"user-data"`` or
    ``"provider-data"``).
    """

    label: str
    intent: Optional[Intent] = None
    payload: Optional[str] = None


def title_of(screen: Screen) -> str:
    return SCREEN_TITLES[screen]


def actions_for(
    screen: Screen,
    *,
    history_mode: HistoryMode = HistoryMode.EXPLICIT,
    chats: Optional[list[Chat]] = None,
) -> list[ScreenAction]:
    """The intents *screen* may send, in display order."""
    chats = CHATS if chats is None else chats
    # Feature screens go back to the dashboard unless every jump is recorded.
    leaf_back: Intent = Back() if history_mode == HistoryMode.ALL else BackToDashboard()

    if screen == Screen.SPLASH:
        return []
    if screen == Screen.WELCOME:
        return [ScreenAction("Begin My Journey", GetStarted())]
    if screen == Screen.AUTH:
        return [
            ScreenAction("Log in", LoginSuccess()),
            ScreenAction("Log in as a healthcare provider", ProviderLogin()),
            ScreenAction("Forgot password", ForgotPassword()),
            ScreenAction("Back", BackToWelcome()),
        ]
    if screen == Screen.PASSWORD_RESET:
        return [ScreenAction("Back to sign in", BackToAuth())]
    if screen == Screen.ONBOARDING:
        return [
            ScreenAction("Complete my profile", payload="user-data"),
            ScreenAction("Skip for now", OnboardingSkip()),
        ]
    if screen == Screen.PROVIDER_ONBOARDING:
        return [
            ScreenAction("Complete registration", payload="provider-data"),
            ScreenAction("Skip for now", ProviderOnboardingSkip()),
        ]
    if screen == Screen.DASHBOARD:
        actions = [
            ScreenAction(SCREEN_TITLES[dest], NavigateTo(screen=dest))
            for dest in DASHBOARD_DESTINATIONS
        ]
        actions.append(ScreenAction("Sign out", SignOut()))
        return actions
    if screen == Screen.CHAT:
        actions = [ScreenAction(c.name, ChatSelect(chat_id=c.id)) for c in chats]
        actions.append(ScreenAction("Back", leaf_back))
        return actions
    if screen == Screen.CHAT_SCREEN:
        return [ScreenAction("Back to chats", BackToChat())]
    if screen == Screen.SETTINGS:
        return [ScreenAction("Back", leaf_back), ScreenAction("Sign out", SignOut())]
    return [ScreenAction("Back", leaf_back)]
