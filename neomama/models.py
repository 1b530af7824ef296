"""Pydantic models for screens, intents and the data each feature stores."""

from __future__ import annotations

import enum
from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class Screen(str, enum.Enum):
    """Every full-page view the navigator can display."""

    SPLASH = "splash"
    WELCOME = "welcome"
    AUTH = "auth"
    PASSWORD_RESET = "password-reset"
    ONBOARDING = "onboarding"
    PROVIDER_ONBOARDING = "provider-onboarding"
    DASHBOARD = "dashboard"
    CALENDAR = "calendar"
    HOSPITALS = "hospitals"
    CHAT = "chat"
    CHAT_SCREEN = "chat-screen"
    PROFILE = "profile"
    PHOTOS = "photos"
    FOOD = "food"
    BABY_TRACKER = "baby-tracker"
    MARKETPLACE = "marketplace"
    SYMPTOMS = "symptoms"
    MENTAL_HEALTH = "mental-health"
    EMERGENCY = "emergency"
    ARTICLES_VIDEOS = "articles-videos"
    SETTINGS = "settings"
    BUDDY_SYSTEM = "buddy-system"
    CONTRACTIONS = "contractions"
    TRANSPORT = "transport"
    CHILDCARE = "childcare"
    AI_ASSISTANT = "ai-assistant"
    PROVIDER_PORTAL = "provider-portal"
    MEDICATIONS = "medications"
    COMPLICATIONS = "complications"
    VITALS = "vitals"
    EMERGENCY_ALERT = "emergency-alert"
    BIRTH_PREPAREDNESS = "birth-preparedness"
    AI_RISK = "ai-risk"
    VOICE_NAV = "voice-nav"
    CHW_PORTAL = "chw-portal"
    APPOINTMENTS = "appointments"
    GAMIFIED_EDU = "gamified-edu"
    BIRTH_CERT = "birth-cert"
    DELIVERY_PLAN = "delivery-plan"
    WEARABLES = "wearables"
    IMPACT = "impact"
    CHATBOT = "chatbot"


class UserType(str, enum.Enum):
    """Values stored under the ``userType`` flag."""

    PROVIDER = "provider"


class HistoryMode(str, enum.Enum):
    """Which forward transitions record the previous screen for "back"."""

    EXPLICIT = "explicit"  # only NavigateWithHistory pushes
    ALL = "all"  # NavigateTo pushes as well


# ---------------------------------------------------------------------------
# Onboarding payloads
# ---------------------------------------------------------------------------


class UserData(BaseModel):
    """Profile collected by the mother's onboarding flow."""

    name: str = ""
    phone: str = ""
    location: str = ""
    due_date: Optional[date] = None
    pregnancy_week: Optional[int] = Field(default=None, ge=1, le=42)
    first_pregnancy: bool = True
    emergency_contact: Optional[str] = None
    health_conditions: list[str] = Field(default_factory=list)


class ProviderData(BaseModel):
    """Profile collected by the healthcare-provider onboarding flow."""

    name: str = ""
    title: str = ""
    facility: str = ""
    license_number: str = ""
    specialty: str = ""
    phone: str = ""
    location: str = ""


# ---------------------------------------------------------------------------
# Navigation intents
# ---------------------------------------------------------------------------


class SplashTimeout(BaseModel):
    kind: Literal["splash-timeout"] = "splash-timeout"


class GetStarted(BaseModel):
    kind: Literal["get-started"] = "get-started"


class BackToWelcome(BaseModel):
    kind: Literal["back-to-welcome"] = "back-to-welcome"


class ForgotPassword(BaseModel):
    kind: Literal["forgot-password"] = "forgot-password"


class BackToAuth(BaseModel):
    kind: Literal["back-to-auth"] = "back-to-auth"


class LoginSuccess(BaseModel):
    kind: Literal["login-success"] = "login-success"


class ProviderLogin(BaseModel):
    kind: Literal["provider-login"] = "provider-login"


class OnboardingComplete(BaseModel):
    kind: Literal["onboarding-complete"] = "onboarding-complete"
    user: UserData


class OnboardingSkip(BaseModel):
    kind: Literal["onboarding-skip"] = "onboarding-skip"


class ProviderOnboardingComplete(BaseModel):
    kind: Literal["provider-onboarding-complete"] = "provider-onboarding-complete"
    provider: ProviderData


class ProviderOnboardingSkip(BaseModel):
    kind: Literal["provider-onboarding-skip"] = "provider-onboarding-skip"


class NavigateTo(BaseModel):
    """Direct jump to a screen; does not record history by default."""

    kind: Literal["navigate-to"] = "navigate-to"
    screen: Screen


class NavigateWithHistory(BaseModel):
    """Jump to a screen, remembering the current one for ``Back``."""

    kind: Literal["navigate-with-history"] = "navigate-with-history"
    screen: Screen


class ChatSelect(BaseModel):
    kind: Literal["chat-select"] = "chat-select"
    chat_id: str


class BackToChat(BaseModel):
    kind: Literal["back-to-chat"] = "back-to-chat"


class BackToDashboard(BaseModel):
    kind: Literal["back-to-dashboard"] = "back-to-dashboard"


class Back(BaseModel):
    kind: Literal["back"] = "back"


class SignOut(BaseModel):
    kind: Literal["sign-out"] = "sign-out"


Intent = Annotated[
    Union[
        SplashTimeout,
        GetStarted,
        BackToWelcome,
        ForgotPassword,
        BackToAuth,
        LoginSuccess,
        ProviderLogin,
        OnboardingComplete,
        OnboardingSkip,
        ProviderOnboardingComplete,
        ProviderOnboardingSkip,
        NavigateTo,
        NavigateWithHistory,
        ChatSelect,
        BackToChat,
        BackToDashboard,
        Back,
        SignOut,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Assessments
# ---------------------------------------------------------------------------


class AssessmentType(str, enum.Enum):
    """Available self-assessment types."""

    EPDS = "epds"  # Edinburgh Postnatal Depression Scale


class AssessmentResult(BaseModel):
    """A completed self-assessment result."""

    id: int
    assessment_type: AssessmentType
    score: int = Field(ge=0)
    max_score: int = Field(gt=0)
    item_scores: dict[str, int] = Field(default_factory=dict)
    taken_at: datetime = Field(default_factory=datetime.now)


class AssessmentResultCreate(BaseModel):
    """Input model for saving an assessment result."""

    assessment_type: AssessmentType
    score: int = Field(ge=0)
    max_score: int = Field(gt=0)
    item_scores: dict[str, int] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Messaging
# ---------------------------------------------------------------------------


class Chat(BaseModel):
    """A conversation shown in the community chat list."""

    id: str
    name: str
    last_message: str
    timestamp: str
    unread_count: int = Field(default=0, ge=0)
    is_online: bool = False
    is_group: bool = False
    pregnancy_week: Optional[int] = None
    location: Optional[str] = None


class ChatInfo(BaseModel):
    """Header details for an open conversation."""

    id: str
    name: str
    is_group: bool
    is_online: bool
    pregnancy_week: int = 28
    location: str = "Nairobi"
    due_date: str = "March 15, 2025"
    bio: str = "First-time mama, excited for this journey!"


class Message(BaseModel):
    """A single chat message."""

    id: str
    chat_id: str
    sender_id: str
    sender_name: str
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def is_me(self) -> bool:
        return self.sender_id == "me"


# ---------------------------------------------------------------------------
# Calendar notes
# ---------------------------------------------------------------------------

NOTE_CATEGORIES: dict[str, str] = {
    "health": "Health Tips",
    "symptoms": "Symptoms",
    "appointments": "Appointments",
    "nutrition": "Nutrition",
    "exercise": "Exercise",
    "mood": "Mood",
}


class Note(BaseModel):
    """A calendar note saved by the user."""

    id: int
    text: str
    date: date
    category: str = "health"
    created_at: datetime = Field(default_factory=datetime.now)


class NoteCreate(BaseModel):
    """Input model for saving a calendar note."""

    text: str
    date: date
    category: str = "health"

    @field_validator("text")
    @classmethod
    def _strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("note text must not be empty")
        return v

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        if v not in NOTE_CATEGORIES:
            raise ValueError(f"unknown category {v!r}")
        return v


# ---------------------------------------------------------------------------
# Emergency transport
# ---------------------------------------------------------------------------


class TransportType(str, enum.Enum):
    AMBULANCE = "ambulance"
    FLYING_DOCTOR = "flying-doctor"
    HOSPITAL_TRANSPORT = "hospital-transport"
    PRIVATE = "private"


class TransportService(BaseModel):
    """An emergency transport provider listed in the directory."""

    id: str
    name: str
    type: TransportType
    phone: str
    coverage: list[str]
    response_time: str
    cost: str
    features: list[str] = Field(default_factory=list)
    rating: float = Field(ge=0, le=5)
    is_partner: bool = False
    available_24_7: bool = True
    has_nicu: bool = False
    specializations: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Baby development
# ---------------------------------------------------------------------------


class WeekDevelopment(BaseModel):
    """Milestone data for one pregnancy week."""

    week: int = Field(ge=1, le=42)
    baby_size: str
    baby_weight: str
    baby_height: str
    milestone: str
    details: str
    development_highlights: list[str]
    mama_body: list[str]
    trimester: int = Field(ge=1, le=3)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class AppConfig(BaseModel):
    """Application configuration (persisted to ~/.config/neomama/config.json)."""

    db_path: Optional[str] = None  # None = use default (~/.local/share/neomama/)
    splash_delay_s: float = Field(default=10.0, ge=0, allow_inf_nan=False)
    history_mode: HistoryMode = HistoryMode.EXPLICIT
