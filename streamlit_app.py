"""Streamlit Web Application for PostMate.

Streamlit-based interface with authentication for:
- Composing one post for several SNS platforms with live character limits
- Per-platform content, schedules and images, with optional AI drafts
- Dashboard of scheduled posts with their displayed delivery status
- Configuring the Google Sheet, AI service and automation webhook
- Viewing the in-app activity log
"""

from __future__ import annotations

from datetime import datetime, timedelta

import streamlit as st
import streamlit_authenticator as stauth
from pathlib import Path
import yaml
from yaml.loader import SafeLoader

from postmate.ai_providers import AIService, AISettings, check_ai_connection, generate_platform_drafts
from postmate.app_log import AppLog
from postmate.config import RECONCILE_INTERVAL_SECONDS, AppConfig, load_config
from postmate.errors import ConfigurationError, PostMateError, user_friendly_message
from postmate.fanout import submit_post
from postmate.models import PlatformSchedule, Post, PostStatus, group_records
from postmate.paths import get_log_path, get_preferences_path
from postmate.platforms import badge_for, display_name_for, max_length_for, platform_ids
from postmate.preferences import FONT_SIZES, Preferences
from postmate.reconciler import reconcile, status_counts
from postmate.request_state import Phase, RequestState
from postmate.scheduler import check_scheduled_posts
from postmate.schedule_time import LOCAL_TZ, format_local
from postmate.sheets import SheetsDatastore
from postmate.user_settings import UserSettings, get_user_settings, save_user_settings
from postmate.validation import effective_content, validate
from postmate.webhook import resolve_webhook_url, test_webhook


# Page configuration
st.set_page_config(
    page_title="PostMate",
    page_icon="📮",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        margin-bottom: 1rem;
    }
    .status-pending { color: #b8860b; font-weight: bold; }
    .status-sent { color: #28a745; font-weight: bold; }
    .status-failed { color: #dc3545; font-weight: bold; }
    .status-draft { color: #6c757d; font-weight: bold; }
</style>
""", unsafe_allow_html=True)

FONT_SIZE_CSS = {"small": "14px", "medium": "16px", "large": "18px"}

STATUS_ICONS = {
    PostStatus.DRAFT: "📝",
    PostStatus.PENDING: "⏳",
    PostStatus.SENT: "✅",
    PostStatus.FAILED: "❌",
}


# Authentication Configuration
def load_auth_config():
    """Load authentication configuration from Streamlit secrets or YAML file."""
    cookie = {
        'expiry_days': 30,
        'key': 'postmate_cookie',
        'name': 'postmate_auth_cookie'
    }

    # Try loading from Streamlit secrets first (for cloud deployment)
    if hasattr(st, 'secrets') and 'credentials' in st.secrets:
        return {'credentials': st.secrets['credentials'], 'cookie': cookie}

    # Try loading from YAML file (for local development)
    config_file = Path(__file__).parent / ".streamlit" / "credentials.yaml"
    if config_file.exists():
        with open(config_file) as file:
            return yaml.load(file, Loader=SafeLoader)

    st.error("No login credentials configured. Add a [credentials] table to secrets.toml "
             "or create .streamlit/credentials.yaml.")
    st.stop()


def initialize_auth():
    """Initialize authentication system."""
    config = load_auth_config()

    # streamlit-authenticator writes to the credentials dict, so copy out of read-only st.secrets
    credentials = {'usernames': {}}
    for username, user_data in config['credentials']['usernames'].items():
        credentials['usernames'][str(username)] = {
            'name': str(user_data['name']),
            'password': str(user_data['password'])
        }

    cookie = config['cookie']
    return stauth.Authenticate(
        credentials,
        str(cookie['name']),
        str(cookie['key']),
        int(cookie['expiry_days'])
    )


# Initialize session state
if 'authentication_status' not in st.session_state:
    st.session_state['authentication_status'] = None
if 'name' not in st.session_state:
    st.session_state['name'] = None
if 'username' not in st.session_state:
    st.session_state['username'] = None


def show_login_page():
    """Display login page."""
    st.markdown('<p class="main-header">📮 PostMate Login</p>', unsafe_allow_html=True)

    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        authenticator = initialize_auth()
        authenticator.login(location='main')

        authentication_status = st.session_state.get('authentication_status')
        if authentication_status is False:
            st.error('Username/password is incorrect')
        elif authentication_status is None:
            st.warning('Please enter your username and password')

        if authentication_status:
            st.rerun()


# ===== SESSION HELPERS =====

def get_app_log() -> AppLog:
    if 'app_log' not in st.session_state:
        st.session_state.app_log = AppLog(get_log_path()).load()
    return st.session_state.app_log


def get_preferences() -> Preferences:
    if 'preferences' not in st.session_state:
        st.session_state.preferences = Preferences.load(get_preferences_path())
    return st.session_state.preferences


def get_request_state(name: str) -> RequestState:
    key = f"request_{name}"
    if key not in st.session_state:
        st.session_state[key] = RequestState()
    return st.session_state[key]


def set_request_state(name: str, state: RequestState) -> None:
    st.session_state[f"request_{name}"] = state


def get_user_config() -> tuple[AppConfig, UserSettings]:
    """App configuration with the signed-in user's saved settings applied."""
    config = load_config()
    settings = get_user_settings(st.session_state['username'], config)
    return settings.apply_to(config), settings


def get_datastore(config: AppConfig) -> SheetsDatastore | None:
    if not config.is_sheets_configured():
        return None
    return SheetsDatastore.from_config(config)


def show_error(error: Exception | str, key: str) -> None:
    """Friendly alert; `key` names the caller so action buttons stay unique per page."""
    friendly = user_friendly_message(error)
    st.error(f"**{friendly.title}**\n\n{friendly.description}")
    if friendly.action_label and st.button(friendly.action_label, key=f"action_{key}"):
        st.session_state.page = 'settings'
        st.rerun()


def apply_preferences(prefs: Preferences) -> None:
    css = f"html, body, [class*='css'] {{ font-size: {FONT_SIZE_CSS[prefs.font_size]}; }}"
    if prefs.compact_mode:
        css += " .block-container { padding-top: 1rem; padding-bottom: 1rem; } div[data-testid='stVerticalBlock'] { gap: 0.4rem; }"
    st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)


def show_onboarding(prefs: Preferences) -> None:
    if prefs.onboarding_seen:
        return
    with st.container(border=True):
        st.markdown("#### 👋 Welcome to PostMate")
        st.markdown(
            "1. **Settings**: connect your Google Sheet and the automation webhook\n"
            "2. **Compose**: write once and tailor it per platform\n"
            "3. **Dashboard**: follow delivery status of every post"
        )
        if st.button("Got it", key="onboarding_done"):
            prefs.mark_onboarding_seen()
            st.rerun()


# ===== DASHBOARD =====

def show_dashboard():
    """Display the posts dashboard."""
    st.markdown('<p class="main-header">📊 Dashboard</p>', unsafe_allow_html=True)

    config, _ = get_user_config()
    datastore = get_datastore(config)
    if datastore is None:
        show_error(ConfigurationError("Google Sheet not configured"), key="dashboard")
        return

    col1, col2 = st.columns([3, 1])
    with col2:
        if st.button("⏰ Check Scheduled Posts", use_container_width=True):
            run_scheduled_check(config, datastore)
        if st.button("➕ New Post", use_container_width=True):
            start_compose(Post())
            st.rerun()

    show_posts_table(datastore)


def run_scheduled_check(config: AppConfig, datastore: SheetsDatastore) -> None:
    app_log = get_app_log()
    state = get_request_state("scheduled_check").reset().start()
    set_request_state("scheduled_check", state)
    try:
        with st.spinner("Checking scheduled posts..."):
            webhook_url = resolve_webhook_url(config.webhook_url, datastore)
            state = state.succeed(check_scheduled_posts(datastore, webhook_url, log=app_log))
    except PostMateError as e:
        state = state.fail(e)
    finally:
        app_log.flush()
    set_request_state("scheduled_check", state)

    if state.phase is Phase.FAILED:
        show_error(state.error, key="scheduled_check")
    elif state.result.due:
        st.success(f"Triggered the automation for {state.result.processed_count} due post(s).")
    else:
        st.info("No scheduled posts are due.")


@st.fragment(run_every=RECONCILE_INTERVAL_SECONDS)
def show_posts_table(datastore: SheetsDatastore):
    """Posts grouped by base id; pending posts long past schedule show as failed."""
    try:
        records = datastore.fetch_records()
    except PostMateError as e:
        show_error(e, key="posts_table")
        return

    displayed = reconcile(records)
    by_id = {item.record.id: item for item in displayed}

    counts = status_counts(displayed)
    cols = st.columns(len(counts))
    for col, (status, count) in zip(cols, counts.items()):
        with col:
            st.metric(f"{STATUS_ICONS[PostStatus(status)]} {status.title()}", count)

    st.caption(f"Updated {datetime.now(LOCAL_TZ).strftime('%H:%M:%S')} JST, refreshes every {RECONCILE_INTERVAL_SECONDS}s")
    st.divider()

    groups = group_records(records)
    if not groups:
        st.info("No posts yet. Compose your first post!")
        return

    for group in reversed(groups):
        primary = group.primary
        badges = " ".join(badge_for(p) for p in group.platforms)
        preview = primary.content[:60] + ("..." if len(primary.content) > 60 else "")
        with st.expander(f"{badges}  {preview or '(empty)'}"):
            for record in group.records:
                item = by_id.get(record.id)
                status = item.display_status if item else record.status
                line = (
                    f"{badge_for(record.platform)} **{display_name_for(record.platform)}**  ·  "
                    f"{format_local(record.schedule_time)}  ·  "
                    f"<span class='status-{status.value}'>{STATUS_ICONS[status]} {status.value}</span>"
                )
                if item and item.is_overridden:
                    line += f"  <small>(stored: {item.stored_status.value})</small>"
                st.markdown(line, unsafe_allow_html=True)
                if record.image_ids:
                    st.caption(f"Images: {', '.join(record.image_ids)}")

            st.text(primary.content)

            col1, col2 = st.columns(2)
            with col1:
                if st.button("✏️ Edit", key=f"edit_{group.base_id}", use_container_width=True):
                    start_compose(group.to_post())
                    st.rerun(scope="app")
            with col2:
                if st.button("🗑️ Delete", key=f"delete_{group.base_id}", use_container_width=True):
                    try:
                        datastore.delete_post(group.base_id)
                        get_app_log().info("Post deleted", {"baseId": group.base_id})
                        st.rerun(scope="fragment")
                    except PostMateError as e:
                        show_error(e, key=f"delete_{group.base_id}")
                    finally:
                        get_app_log().flush()


# ===== COMPOSE =====

def start_compose(post: Post) -> None:
    """Load a post into the composer and reset its widgets."""
    st.session_state.compose_post = post
    st.session_state.compose_version = st.session_state.get('compose_version', 0) + 1
    st.session_state.page = 'compose'


def compose_key(name: str) -> str:
    return f"compose_{st.session_state.get('compose_version', 0)}_{name}"


def init_widget(name: str, value) -> str:
    key = compose_key(name)
    if key not in st.session_state:
        st.session_state[key] = value
    return key


def default_schedule() -> tuple:
    later = datetime.now(LOCAL_TZ) + timedelta(hours=1)
    return later.date(), later.time().replace(second=0, microsecond=0)


def parse_schedule(date_str: str, time_str: str) -> tuple:
    if not date_str or not time_str:
        return default_schedule()
    parsed = datetime.strptime(f"{date_str} {time_str}", "%Y-%m-%d %H:%M")
    return parsed.date(), parsed.time()


def generate_drafts_callback(content: str, instruction: str, platforms: list, config: AppConfig) -> None:
    """Fill the per-platform override fields with AI drafts."""
    app_log = get_app_log()
    state = get_request_state("generate").reset().start()
    set_request_state("generate", state)
    try:
        drafts = generate_platform_drafts(content, instruction, platforms, AISettings.from_config(config), log=app_log)
        for platform, text in drafts.items():
            st.session_state[compose_key(f"content_{platform}")] = text
        set_request_state("generate", state.succeed(drafts))
    except PostMateError as e:
        set_request_state("generate", state.fail(e))
    finally:
        app_log.flush()


def show_compose_page():
    """Display the post composer."""
    post: Post = st.session_state.get('compose_post') or Post()
    title = "✏️ Edit Post" if post.is_editing else "📝 Compose Post"
    st.markdown(f'<p class="main-header">{title}</p>', unsafe_allow_html=True)

    config, settings = get_user_config()
    ai_ready = settings.ai_ready(config)

    flash = st.session_state.pop('compose_flash', None)
    if flash:
        st.success(flash)

    content = st.text_area(
        "Content",
        key=init_widget("content", post.content),
        height=160,
        help="Shared text used for every platform without its own version",
    )

    platforms = st.multiselect(
        "Platforms",
        platform_ids(),
        key=init_widget("platforms", list(post.platforms)),
        format_func=lambda p: f"{badge_for(p)} {display_name_for(p)}",
        disabled=post.is_editing,
        help="Platforms cannot be changed while editing a post" if post.is_editing else None,
    )

    # AI drafts
    with st.expander("🤖 Generate platform drafts with AI"):
        instruction = st.text_area("Instruction", key=init_widget("instruction", ""), placeholder="e.g. Casual tone, add hashtags")
        generate_state = get_request_state("generate")
        if not config.is_ai_configured():
            st.info("Configure an AI service in Settings to generate drafts.")
        elif not ai_ready:
            st.info("Run the AI connection test in Settings to enable drafts.")
        st.button(
            "✨ Generate",
            on_click=generate_drafts_callback,
            args=(content, instruction, platforms, config),
            disabled=not ai_ready or generate_state.is_loading,
        )
        if generate_state.phase is Phase.SUCCEEDED:
            st.success(f"Generated drafts for {len(generate_state.result)} platform(s).")
        elif generate_state.phase is Phase.FAILED:
            show_error(generate_state.error, key="generate")

    # Per-platform settings
    platform_content = {}
    platform_schedules = {}
    platform_images = {}
    if platforms:
        st.subheader("Per-platform settings")
    for platform in platforms:
        limit = max_length_for(platform)
        with st.expander(f"{badge_for(platform)} {display_name_for(platform)}", expanded=True):
            override = st.text_area(
                "Platform text (leave empty to use the shared content)",
                key=init_widget(f"content_{platform}", post.platform_content.get(platform, "")),
            )
            if override:
                platform_content[platform] = override

            length = len(effective_content(content, platform_content, platform))
            if limit and length > limit:
                st.markdown(f":red[{length} / {limit}]")
            else:
                st.caption(f"{length} / {limit}")

            existing = post.platform_schedules.get(platform, PlatformSchedule())
            date_value, time_value = parse_schedule(existing.date, existing.time)
            own_schedule = st.checkbox("Own schedule", key=init_widget(f"sched_on_{platform}", existing.enabled))
            if own_schedule:
                col1, col2 = st.columns(2)
                with col1:
                    date = st.date_input("Date (JST)", key=init_widget(f"sched_date_{platform}", date_value))
                with col2:
                    time = st.time_input("Time (JST)", key=init_widget(f"sched_time_{platform}", time_value))
                platform_schedules[platform] = PlatformSchedule(True, date.strftime("%Y-%m-%d"), time.strftime("%H:%M"))

            images = st.text_input(
                "Image IDs (comma separated, empty = shared images)",
                key=init_widget(f"images_{platform}", ", ".join(post.platform_images.get(platform, []))),
            )
            image_list = [i.strip() for i in images.split(",") if i.strip()]
            if image_list:
                platform_images[platform] = image_list

    # Shared schedule and images
    st.subheader("Schedule")
    is_scheduled = st.checkbox("Schedule for later", key=init_widget("is_scheduled", post.is_scheduled))
    schedule_date = schedule_time = ""
    if is_scheduled:
        date_value, time_value = parse_schedule(post.schedule_date, post.schedule_time)
        col1, col2 = st.columns(2)
        with col1:
            date = st.date_input("Date (JST)", key=init_widget("schedule_date", date_value))
        with col2:
            time = st.time_input("Time (JST)", key=init_widget("schedule_time", time_value))
        schedule_date, schedule_time = date.strftime("%Y-%m-%d"), time.strftime("%H:%M")
    else:
        st.caption("Posts without a schedule are sent immediately by the automation.")

    images = st.text_input("Image IDs (comma separated)", key=init_widget("images", ", ".join(post.image_ids)))

    composed = Post(
        content=content,
        platforms=list(platforms),
        platform_content=platform_content,
        image_ids=[i.strip() for i in images.split(",") if i.strip()],
        platform_images=platform_images,
        platform_schedules=platform_schedules,
        is_scheduled=is_scheduled,
        schedule_date=schedule_date,
        schedule_time=schedule_time,
        status=post.status,
        id=post.id,
    )

    violations = validate(content, platform_content, platforms)
    for messages in violations.values():
        for message in messages:
            st.error(message)

    st.divider()
    submit_state = get_request_state("submit")
    col1, col2, col3 = st.columns(3)
    with col1:
        save_draft = st.button("💾 Save Draft", use_container_width=True,
                               disabled=not platforms or submit_state.is_loading)
    with col2:
        submit = st.button("🚀 Submit", type="primary", use_container_width=True,
                           disabled=not platforms or bool(violations) or submit_state.is_loading)
    with col3:
        if post.is_editing and st.button("✖️ Cancel Edit", use_container_width=True):
            start_compose(Post())
            st.rerun()

    if save_draft or submit:
        run_submission(composed, config, is_draft=save_draft)

    show_submission_result(get_request_state("submit"))


def run_submission(post: Post, config: AppConfig, is_draft: bool) -> None:
    app_log = get_app_log()
    state = get_request_state("submit").reset().start()
    set_request_state("submit", state)
    try:
        datastore = get_datastore(config)
        if datastore is None:
            raise ConfigurationError("Google Sheet not configured")
        with st.spinner("Saving to Google Sheets..."):
            report = submit_post(post, datastore, is_draft=is_draft, log=app_log)
        state = state.succeed(report)
    except PostMateError as e:
        state = state.fail(e)
    finally:
        app_log.flush()

    set_request_state("submit", state)
    if state.phase is Phase.SUCCEEDED and state.result.ok:
        set_request_state("submit", state.reset())
        start_compose(Post())
        st.session_state.compose_flash = state.result.summary()
        st.rerun()


def show_submission_result(state: RequestState) -> None:
    if state.phase is Phase.FAILED:
        show_error(state.error, key="submit")
    elif state.phase is Phase.SUCCEEDED:
        report = state.result
        st.warning(report.summary())
        for platform, error in report.failed.items():
            friendly = user_friendly_message(error)
            st.error(f"{display_name_for(platform)}: {friendly.title} ({error})")


# ===== SETTINGS =====

def run_ai_connection_test(config: AppConfig, settings: UserSettings, username: str) -> RequestState:
    """Check the AI credentials and store the result as the user's connection flag."""
    app_log = get_app_log()
    state = get_request_state("ai_test").reset().start()
    try:
        check_ai_connection(AISettings.from_config(config), log=app_log)
        state = state.succeed(True)
    except PostMateError as e:
        state = state.fail(e)
    finally:
        app_log.flush()

    save_user_settings(username, settings.updated(ai_connection_status=state.phase is Phase.SUCCEEDED))
    set_request_state("ai_test", state)
    return state


def show_settings_page():
    """Display settings for the sheet, AI service, webhook and preferences."""
    st.markdown('<p class="main-header">⚙️ Settings</p>', unsafe_allow_html=True)

    config, settings = get_user_config()
    username = st.session_state['username']

    col1, col2, col3 = st.columns(3)
    with col1:
        if config.is_sheets_configured():
            st.success("✓ Google Sheet")
        else:
            st.error("✗ Google Sheet Not Configured")
    with col2:
        if settings.ai_ready(config):
            st.success("✓ AI Service")
        elif config.is_ai_configured():
            st.warning("⚠ AI Service Not Tested")
        else:
            st.error("✗ AI Service Not Configured")
    with col3:
        if config.is_webhook_configured():
            st.success("✓ Webhook")
        else:
            st.warning("⚠ Webhook Not Configured")

    st.divider()

    with st.form("user_settings"):
        st.subheader("📄 Google Sheet")
        sheet_id = st.text_input("Sheet ID", value=settings.google_sheet_id)
        sheet_url = st.text_input("Sheet URL", value=settings.google_sheet_url)

        st.subheader("🤖 AI Service")
        services = [s.value for s in AIService]
        current_service = settings.ai_service or config.ai_service
        service = st.selectbox(
            "Service",
            services,
            index=services.index(current_service) if current_service in services else 0,
            format_func=lambda s: AIService(s).label,
        )
        model = st.text_input("Model", value=settings.ai_model, placeholder=config.ai_model)
        token = st.text_input("API Token", value=settings.ai_api_token, type="password")

        st.subheader("🔗 Automation Webhook")
        webhook_url = st.text_input("Webhook URL", value=settings.webhook_url)

        if st.form_submit_button("💾 Save Settings", type="primary"):
            updated = settings.updated(
                google_sheet_id=sheet_id.strip(),
                google_sheet_url=sheet_url.strip(),
                ai_service=service,
                ai_model=model.strip(),
                ai_api_token=token.strip(),
                webhook_url=webhook_url.strip(),
            )
            save_user_settings(username, updated)
            get_app_log().info("User settings saved", {"username": username})
            get_app_log().flush()
            st.success("Settings saved!")
            st.rerun()

    st.subheader("🧪 Connections")
    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("📄 Prepare Posts Sheet", use_container_width=True, disabled=not config.is_sheets_configured()):
            try:
                datastore = get_datastore(config)
                created = datastore.ensure_posts_sheet()
                if config.webhook_url:
                    datastore.save_webhook_url(config.webhook_url)
                st.success("Posts tab created." if created else "Posts tab already exists.")
            except PostMateError as e:
                show_error(e, key="prepare_sheet")
    with col2:
        webhook_state = get_request_state("webhook_test")
        if st.button("🔔 Send Test Webhook", use_container_width=True, disabled=webhook_state.is_loading):
            app_log = get_app_log()
            state = webhook_state.reset().start()
            try:
                datastore = None if config.webhook_url else get_datastore(config)
                test_webhook(resolve_webhook_url(config.webhook_url, datastore), log=app_log)
                state = state.succeed()
            except PostMateError as e:
                state = state.fail(e)
            finally:
                app_log.flush()
            set_request_state("webhook_test", state)
            webhook_state = state
        if webhook_state.phase is Phase.SUCCEEDED:
            st.success("Test webhook sent.")
        elif webhook_state.phase is Phase.FAILED:
            show_error(webhook_state.error, key="webhook_test")
    with col3:
        ai_state = get_request_state("ai_test")
        if st.button("🤖 Test AI Connection", use_container_width=True,
                     disabled=not config.is_ai_configured() or ai_state.is_loading):
            ai_state = run_ai_connection_test(config, settings, username)
        if ai_state.phase is Phase.SUCCEEDED:
            st.success("AI connection verified.")
        elif ai_state.phase is Phase.FAILED:
            show_error(ai_state.error, key="ai_test")

    st.divider()
    st.subheader("🎨 Display")
    prefs = get_preferences()
    font_size = st.radio("Font size", FONT_SIZES, index=FONT_SIZES.index(prefs.font_size), horizontal=True)
    if font_size != prefs.font_size:
        prefs.set_font_size(font_size)
        st.rerun()
    compact = st.checkbox("Compact mode", value=prefs.compact_mode)
    if compact != prefs.compact_mode:
        prefs.set_compact_mode(compact)
        st.rerun()


# ===== LOGS =====

def show_logs_page():
    """Display the in-app activity log."""
    st.markdown('<p class="main-header">📜 Activity Log</p>', unsafe_allow_html=True)

    app_log = get_app_log()
    col1, col2 = st.columns([3, 1])
    with col1:
        level = st.selectbox("Level", ["ALL", "DEBUG", "INFO", "WARN", "ERROR"])
    with col2:
        if st.button("🗑️ Clear Log", use_container_width=True):
            app_log.clear()
            st.rerun()

    entries = [e for e in app_log.entries() if level == "ALL" or e["type"] == level]
    if not entries:
        st.info("No log entries.")
        return

    icons = {"DEBUG": "🔎", "INFO": "ℹ️", "WARN": "⚠️", "ERROR": "❌"}
    for entry in entries:
        label = f"{icons.get(entry['type'], '')} {entry['timestamp']}  {entry['message']}"
        if entry.get("data"):
            with st.expander(label):
                st.code(entry["data"], language="json")
        else:
            st.markdown(label)


def main():
    """Main application entry point."""

    # Check authentication
    if st.session_state.get('authentication_status') is not True:
        show_login_page()
        return

    authenticator = initialize_auth()
    prefs = get_preferences()
    apply_preferences(prefs)

    # Sidebar navigation
    with st.sidebar:
        st.markdown(f"### 👤 Welcome, {st.session_state['name']}!")
        authenticator.logout(location='sidebar')

        st.divider()
        st.subheader("Navigation")

        if 'page' not in st.session_state:
            st.session_state.page = 'dashboard'

        page_options = ["Dashboard", "Compose", "Settings", "Logs"]
        try:
            default_index = page_options.index(st.session_state.page.title())
        except (ValueError, AttributeError):
            default_index = 0

        page = st.radio("Go to:", page_options, index=default_index)
        if page:
            st.session_state.page = page.lower()

        st.divider()
        st.caption("PostMate v1.0")
        st.caption("All times are shown in JST (UTC+9)")

    show_onboarding(prefs)

    current_page = st.session_state.page
    if current_page == 'dashboard':
        show_dashboard()
    elif current_page == 'compose':
        show_compose_page()
    elif current_page == 'settings':
        show_settings_page()
    elif current_page == 'logs':
        show_logs_page()


if __name__ == "__main__":
    main()
