"""NeoMama CLI -- a maternal-health companion in the terminal."""

from __future__ import annotations

import logging
import sqlite3
import time
from contextlib import closing
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.logging import RichHandler

from neomama import assessments, chat, db, development, display, encouragement, screens, transport
from neomama import config as cfg
from neomama.models import (
    AssessmentType,
    HistoryMode,
    Intent,
    NavigateTo,
    NOTE_CATEGORIES,
    NoteCreate,
    OnboardingComplete,
    ProviderData,
    ProviderOnboardingComplete,
    Screen,
    TransportType,
    UserData,
)
from neomama.navigator import LoopScheduler, Navigator
from neomama.storage import FlagKey, FlagStore, SqliteFlagStore

log = logging.getLogger(__name__)

app = typer.Typer(
    name="neomama",
    help="Your companion through pregnancy and early motherhood.",
    no_args_is_help=True,
)

DEFAULT_WEEK = 20


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Your companion through pregnancy and early motherhood."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=display.console, show_path=False)],
        )


def _conn() -> sqlite3.Connection:
    """Get a database connection (convenience wrapper)."""
    return db.get_connection()


def _load_user_data(flags: FlagStore) -> Optional[UserData]:
    """The saved onboarding profile; unreadable blobs count as absent."""
    raw = flags.get(FlagKey.USER_DATA)
    if not raw:
        return None
    try:
        return UserData.model_validate_json(raw)
    except ValidationError:
        log.debug("ignoring unreadable %s flag", FlagKey.USER_DATA)
        return None


def _load_provider_data(flags: FlagStore) -> Optional[ProviderData]:
    raw = flags.get(FlagKey.PROVIDER_DATA)
    if not raw:
        return None
    try:
        return ProviderData.model_validate_json(raw)
    except ValidationError:
        log.debug("ignoring unreadable %s flag", FlagKey.PROVIDER_DATA)
        return None


def _current_week(user: Optional[UserData]) -> int:
    if user is not None:
        if user.pregnancy_week is not None:
            return user.pregnancy_week
        if user.due_date is not None:
            return development.week_from_due_date(user.due_date)
    return DEFAULT_WEEK


# ---------------------------------------------------------------------------
# Interactive session
# ---------------------------------------------------------------------------


def _prompt_optional(label: str) -> str:
    return typer.prompt(label, default="", show_default=False).strip()


def _collect_user_data() -> UserData:
    """Ask for the mother's profile; every field may be left blank."""
    name = _prompt_optional("  Your name")
    location = _prompt_optional("  Where do you live")
    due: Optional[date] = None
    while True:
        raw = _prompt_optional("  Due date (YYYY-MM-DD, blank if unsure)")
        if not raw:
            break
        try:
            due = date.fromisoformat(raw)
            break
        except ValueError:
            display.print_warning("  Please use the format YYYY-MM-DD.")
    first = typer.confirm("  Is this your first pregnancy?", default=True)
    return UserData(name=name, location=location, due_date=due, first_pregnancy=first)


def _collect_provider_data() -> ProviderData:
    return ProviderData(
        name=_prompt_optional("  Full name"),
        title=_prompt_optional("  Title (e.g. Dr., Midwife)"),
        facility=_prompt_optional("  Facility"),
        specialty=_prompt_optional("  Specialty"),
        license_number=_prompt_optional("  License number"),
    )


def _intent_from_action(action: screens.ScreenAction) -> Intent:
    if action.intent is not None:
        return action.intent
    if action.payload == "user-data":
        return OnboardingComplete(user=_collect_user_data())
    if action.payload == "provider-data":
        return ProviderOnboardingComplete(provider=_collect_provider_data())
    raise ValueError(f"unknown payload {action.payload!r}")


def _render_screen(conn: sqlite3.Connection, nav: Navigator) -> None:
    """Print the current screen's header and whatever content it shows."""
    screen = nav.current
    user = _load_user_data(nav.flags)
    subtitle = None
    if screen == Screen.DASHBOARD and user is not None and user.name:
        subtitle = f"Karibu, {user.name}"
    display.print_screen(screens.title_of(screen), subtitle)

    if screen == Screen.DASHBOARD:
        display.print_nudge(encouragement.get_affirmation())
    elif screen == Screen.CALENDAR:
        today = date.today()
        marked = {n.date.day for n in db.list_notes(conn) if n.date.year == today.year and n.date.month == today.month}
        display.print_calendar(
            development.calendar_grid(today.year, today.month), today.year, today.month, marked, today
        )
    elif screen == Screen.CHAT:
        display.print_chat_list(chat.CHATS)
    elif screen == Screen.CHAT_SCREEN:
        info = chat.chat_info(nav.selected_chat_id)
        messages = chat.initial_messages(info) + db.list_messages(conn, info.id)
        display.print_conversation(info, messages)
    elif screen == Screen.BABY_TRACKER:
        week = _current_week(user)
        display.print_week(development.get_week_data(week), week, development.pregnancy_progress(week))
    elif screen == Screen.TRANSPORT:
        display.print_transport(transport.TRANSPORT_SERVICES, transport.EMERGENCY_LINE)
    elif screen == Screen.MENTAL_HEALTH:
        display.print_info(assessments.EPDS_INSTRUCTIONS)
        latest = db.list_assessments(conn, AssessmentType.EPDS, limit=1)
        if latest:
            display.print_epds_result(latest[0], assessments.interpret_epds(latest[0].score))
        display.print_info("Take the check with: neomama epds")
    elif screen == Screen.PROFILE:
        if user is None:
            display.print_info("No profile saved yet.")
        else:
            display.print_flags({k: str(v) for k, v in user.model_dump().items() if v not in (None, "", [])})
    elif screen == Screen.PROVIDER_PORTAL:
        provider = _load_provider_data(nav.flags)
        if provider is not None and provider.name:
            display.print_info("Signed in as " + " ".join(p for p in (provider.title, provider.name) if p))


@app.command()
def run(
    skip_splash: bool = typer.Option(False, "--skip-splash", help="Go straight to the welcome screen"),
) -> None:
    """Open the app and move between screens interactively."""
    config = cfg.load_config()
    scheduler = LoopScheduler()
    conn = _conn()
    nav = Navigator(
        SqliteFlagStore(conn),
        scheduler,
        splash_delay_s=0.0 if skip_splash else config.splash_delay_s,
        history_mode=config.history_mode,
    )
    try:
        while True:
            if nav.current == Screen.SPLASH:
                display.print_splash()
                wait = scheduler.time_until_next()
                if wait:
                    with display.console.status("Loading..."):
                        time.sleep(wait)
                scheduler.run_pending()
                continue

            _render_screen(conn, nav)
            actions = screens.actions_for(nav.current, history_mode=nav.history_mode)
            bottom = screens.BOTTOM_NAV_ITEMS if nav.bottom_nav_visible else []
            display.print_actions(actions, bottom)

            choice = typer.prompt("Choose (q to quit)").strip().lower()
            if choice in ("q", "quit"):
                break
            try:
                index = int(choice) - 1
            except ValueError:
                display.print_warning("Please enter a number from the menu.")
                continue
            if 0 <= index < len(actions):
                intent = _intent_from_action(actions[index])
            elif 0 <= index - len(actions) < len(bottom):
                intent = NavigateTo(screen=bottom[index - len(actions)][1])
            else:
                display.print_warning("Please enter a number from the menu.")
                continue
            nav.dispatch(intent)
    finally:
        nav.close()
        conn.close()


@app.command()
def flags(
    reset: bool = typer.Option(False, "--reset", help="Forget login type and onboarding state"),
) -> None:
    """Show the stored routing flags."""
    with closing(_conn()) as conn:
        store = SqliteFlagStore(conn)
        if reset:
            store.clear()
            display.print_success("Flags cleared.")
        else:
            display.print_flags(store.as_dict())


# ---------------------------------------------------------------------------
# Mental health check
# ---------------------------------------------------------------------------


@app.command()
def epds() -> None:
    """Take the postnatal emotional wellbeing check (EPDS)."""
    display.print_info(assessments.EPDS_INSTRUCTIONS)
    typer.confirm("Ready?", default=True, abort=True)

    answers: dict[str, int] = {}
    for n, item in enumerate(assessments.EPDS_ITEMS, 1):
        display.console.print(f"\n[bold]{n}/{len(assessments.EPDS_ITEMS)}. {item.text}[/bold]")
        for pos, (_value, text) in enumerate(item.options, 1):
            display.console.print(f"    {pos}. {text}")
        while True:
            raw = typer.prompt("  Your answer (1-4)")
            try:
                answers[item.id] = item.option_value(int(raw))
                break
            except ValueError:
                display.print_warning("  Please enter 1, 2, 3, or 4.")

    with closing(_conn()) as conn:
        saved = db.save_assessment(conn, assessments.score_epds(answers))
    interpretation = assessments.interpret_epds(saved.score)
    display.print_epds_result(saved, interpretation)

    if interpretation.level != "low":
        display.console.print("\n[bold]Support Resources[/bold]")
        for name, detail in assessments.SUPPORT_RESOURCES:
            display.print_info(f"  {name}: {detail}")

    display.console.print("\n[bold]Relaxation Exercises[/bold]")
    for session in assessments.RELAXATION_SESSIONS:
        display.print_info(f"  {session.title} ({session.duration}) -- {session.description}")
    display.print_nudge(encouragement.get_breathing_prompt())


@app.command(name="epds-results")
def epds_results(
    limit: int = typer.Option(10, "--limit", "-n", help="Number of results to show"),
) -> None:
    """View past wellbeing check results."""
    with closing(_conn()) as conn:
        results = db.list_assessments(conn, assessment_type=AssessmentType.EPDS, limit=limit)
    if not results:
        display.print_info("No wellbeing checks found.")
        return
    for r in results:
        display.print_epds_result(r, assessments.interpret_epds(r.score))


@app.command(name="epds-chart")
def epds_chart(
    output: Path = typer.Argument(..., help="PNG file to write"),
    limit: int = typer.Option(50, "--limit", "-n", help="Number of results to plot"),
    items: bool = typer.Option(False, "--items", help="Chart each answer of the latest check instead"),
) -> None:
    """Save a chart of wellbeing scores over time."""
    from neomama.charts import epds_item_bars, epds_timeseries

    with closing(_conn()) as conn:
        results = db.list_assessments(conn, assessment_type=AssessmentType.EPDS, limit=1 if items else limit)
    if items:
        if not results:
            display.print_warning("No wellbeing checks found.")
            raise typer.Exit(1)
        image = epds_item_bars(results[0])
    else:
        image = epds_timeseries(results)
        if image is None:
            display.print_warning("At least two checks are needed to draw a chart.")
            raise typer.Exit(1)
    image.save(output, format="png")
    display.print_success(f"Chart saved to {output}")


# ---------------------------------------------------------------------------
# Trackers and directories
# ---------------------------------------------------------------------------


@app.command()
def week(
    week_number: Optional[int] = typer.Argument(None, help="Pregnancy week (1-42); defaults to your profile"),
    next_: bool = typer.Option(False, "--next", help="Step forward to the next tracked week"),
    prev: bool = typer.Option(False, "--prev", help="Step back to the previous tracked week"),
    by_week: bool = typer.Option(False, "--by-week", help="Step one week at a time with --next/--prev"),
) -> None:
    """See how your baby is developing this week."""
    if next_ and prev:
        display.print_warning("Use either --next or --prev, not both.")
        raise typer.Exit(1)
    if week_number is None:
        with closing(_conn()) as conn:
            week_number = _current_week(_load_user_data(SqliteFlagStore(conn)))
    if not 1 <= week_number <= 42:
        display.print_warning("Week must be between 1 and 42.")
        raise typer.Exit(1)
    if next_ or prev:
        if by_week:
            week_number = development.step_week(week_number, "next" if next_ else "prev")
        elif next_:
            week_number = development.next_milestone_week(week_number)
        else:
            week_number = development.previous_milestone_week(week_number)
    data = development.get_week_data(week_number)
    display.print_week(data, week_number, development.pregnancy_progress(week_number))


@app.command(name="transport")
def transport_cmd(
    service_type: str = typer.Option(
        transport.ALL_TYPES, "--type", "-t",
        help="all, ambulance, flying-doctor, hospital-transport, or private",
    ),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Only services covering this area"),
    call: Optional[str] = typer.Option(None, "--call", help="Service id to call"),
) -> None:
    """Find emergency transport."""
    if call is not None:
        service = transport.get_service(call)
        if service is None:
            display.print_warning(f"Service #{call} not found.")
            raise typer.Exit(1)
        phone = transport.call_service(service.phone, service.name)
        display.print_success(f"Call {service.name} on {phone}")
        return

    valid = {transport.ALL_TYPES, *(t.value for t in TransportType)}
    if service_type not in valid:
        display.print_warning(f"Unknown type '{service_type}'. Use one of: {', '.join(sorted(valid))}.")
        raise typer.Exit(1)
    services = transport.filter_services(service_type)
    if location:
        services = transport.services_covering(location, services)
    display.print_transport(services, transport.EMERGENCY_LINE)


@app.command()
def chats(
    search: str = typer.Option("", "--search", "-s", help="Filter by name or last message"),
) -> None:
    """List community conversations."""
    display.print_chat_list(chat.search_chats(search))
    if search:
        return
    display.print_info(f"{chat.unread_total()} unread messages")
    display.print_people(
        "Suggested Sisters",
        [(str(s["name"]), f"Week {s['week']}, {s['location']}") for s in chat.SUGGESTED_SISTERS],
    )
    display.print_people(
        "Mentors",
        [(m["name"], m["specialty"]) for m in chat.AVAILABLE_MENTORS],
    )


@app.command(name="chat")
def chat_cmd(
    chat_id: str = typer.Argument(..., help="Conversation id (see `neomama chats`)"),
    send: Optional[str] = typer.Option(None, "--send", "-m", help="Send a message"),
) -> None:
    """Open a conversation."""
    if chat.get_chat(chat_id) is None:
        display.print_warning(f"Chat #{chat_id} not found.")
        raise typer.Exit(1)
    message = chat.new_message(chat_id, send) if send is not None else None
    if send is not None and message is None:
        display.print_warning("Message is empty.")
        raise typer.Exit(1)
    info = chat.chat_info(chat_id)
    with closing(_conn()) as conn:
        if message is not None:
            db.save_message(conn, message)
        display.print_conversation(info, chat.initial_messages(info) + db.list_messages(conn, chat_id))


@app.command()
def note(
    text: str = typer.Argument(..., help="What do you want to remember?"),
    category: str = typer.Option("health", "--category", "-c", help=", ".join(NOTE_CATEGORIES)),
    on: Optional[str] = typer.Option(None, "--date", "-d", help="YYYY-MM-DD (default today)"),
) -> None:
    """Add a calendar note."""
    try:
        note_date = date.fromisoformat(on) if on else date.today()
    except ValueError:
        display.print_warning("Please use the format YYYY-MM-DD.")
        raise typer.Exit(1)
    try:
        note_in = NoteCreate(text=text, date=note_date, category=category)
    except ValidationError as exc:
        display.print_warning(f"Could not save note: {exc.errors()[0]['msg']}")
        raise typer.Exit(1)
    with closing(_conn()) as conn:
        saved = db.add_note(conn, note_in)
    display.print_success(f"Saved note for {saved.date.isoformat()}: {saved.text}")


@app.command()
def notes(
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Only notes for YYYY-MM-DD"),
) -> None:
    """List calendar notes."""
    try:
        note_date = date.fromisoformat(on) if on else None
    except ValueError:
        display.print_warning("Please use the format YYYY-MM-DD.")
        raise typer.Exit(1)
    with closing(_conn()) as conn:
        display.print_notes(db.list_notes(conn, note_date))


@app.command(name="calendar")
def calendar_cmd(
    month: Optional[str] = typer.Option(None, "--month", help="YYYY-MM (default this month)"),
) -> None:
    """Show a month with the days that have notes marked."""
    today = date.today()
    year, mon = today.year, today.month
    if month:
        try:
            year_s, mon_s = month.split("-")
            year, mon = int(year_s), int(mon_s)
            if not 1 <= mon <= 12:
                raise ValueError(month)
        except ValueError:
            display.print_warning("Please use the format YYYY-MM.")
            raise typer.Exit(1)
    with closing(_conn()) as conn:
        marked = {n.date.day for n in db.list_notes(conn) if n.date.year == year and n.date.month == mon}
    display.print_calendar(development.calendar_grid(year, mon), year, mon, marked, today)


@app.command()
def affirm() -> None:
    """Get an affirmation."""
    display.print_nudge(encouragement.get_affirmation())


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@app.command()
def config(
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Set a custom database file path"),
    splash_delay: Optional[float] = typer.Option(None, "--splash-delay", help="Seconds the splash screen stays up"),
    history_mode: Optional[HistoryMode] = typer.Option(
        None, "--history-mode",
        help="explicit: back returns home from feature screens; all: back retraces every jump",
    ),
    reset: bool = typer.Option(False, "--reset", help="Reset to default local DB"),
    show: bool = typer.Option(False, "--show", help="Show current config"),
) -> None:
    """Configure where data is stored and how navigation behaves."""
    if db_path:
        result = cfg.set_db_path(db_path)
        display.print_success(f"Database path set to: {result.db_path}")
    elif splash_delay is not None:
        try:
            result = cfg.set_splash_delay(splash_delay)
        except ValidationError:
            display.print_warning("Splash delay must be a finite number of seconds, zero or more.")
            raise typer.Exit(1)
        display.print_success(f"Splash delay set to {result.splash_delay_s:g}s.")
    elif history_mode is not None:
        result = cfg.set_history_mode(history_mode)
        display.print_success(f"History mode set to {result.history_mode.value}.")
    elif reset:
        cfg.reset_db_path()
        display.print_success("Reset to default local database.")
    elif show:
        current = cfg.load_config()
        resolved = cfg.get_db_path()
        if current.db_path:
            display.print_info(f"Database: {current.db_path}")
        else:
            display.print_info(f"Database: {resolved} (default)")
        display.print_info(f"Splash delay: {current.splash_delay_s:g}s")
        display.print_info(f"History mode: {current.history_mode.value}")
    else:
        display.print_info("Use --db-path, --splash-delay, --history-mode, --reset, or --show.")
