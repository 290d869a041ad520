"""
SIMS Dashboard - Sports Information Management System
Role-gated Streamlit dashboard for teams, events, live scores and rules
"""

import logging
import os

import pandas as pd
import plotly.express as px
import streamlit as st

from services import (
    EventManagementService, LiveTicker, NestedFormEditor, ScoringService,
    UserRole, ValidationError, can_edit_events,
)
from services.access import MOCK_USERS, can_access_admin, normalize_role, user_for_role, visible_pages
from services.event_management import section_total_points
from store import DEFAULT_SERIES, build_store

# Configuration
APP_TITLE = "Sports Information Management System"
DEFAULT_ROLE = UserRole.USER
TICK_INTERVAL_SECONDS = 3
TICK_SAFETY_MARGIN = 0.1  # fragment reruns can land slightly early
LOG_LEVEL = os.environ.get("SIMS_LOG_LEVEL", "INFO")
NEW_CATEGORY = "-- Add New Category --"

logger = logging.getLogger(__name__)
EDITOR = NestedFormEditor()


def get_first_name(full_name):
    """Extract first name for the greeting"""
    if not full_name:
        return ""
    return str(full_name).split()[0] if str(full_name).strip() else ""


# ================== SESSION STATE ==================

def init_session():
    """Construct the per-session store and services on first run"""
    if "store" in st.session_state:
        return
    store = build_store(DEFAULT_SERIES)
    st.session_state.store = store
    st.session_state.event_service = EventManagementService(store)
    st.session_state.scoring_service = ScoringService(store)
    st.session_state.role = DEFAULT_ROLE.value
    st.session_state.live_ticker = None
    st.session_state.live_ticker_series = None
    reset_add_draft()


def get_store():
    return st.session_state.store


def get_event_service() -> EventManagementService:
    return st.session_state.event_service


def get_scoring_service() -> ScoringService:
    return st.session_state.scoring_service


def current_role() -> UserRole:
    return normalize_role(st.session_state.get("role"))


def get_store_stats():
    """Get statistics for the selected series"""
    series = get_store().series()
    return {
        "Teams": len(series["leaderboard"]),
        "Events": len(series["events"]),
        "Categories": len(get_event_service().get_categories()),
    }


def flash(success, message):
    st.session_state.flash = (success, message)


def show_flash():
    result = st.session_state.pop("flash", None)
    if result:
        success, message = result
        (st.success if success else st.error)(message)


# ================== LIVE TICKER ==================

def stop_live_ticker():
    ticker = st.session_state.get("live_ticker")
    if ticker is not None:
        ticker.stop()


def sync_live_ticker(live_enabled):
    """Keep one ticker for the leaderboard of the selected series"""
    series = get_store().selected_series
    ticker = st.session_state.get("live_ticker")

    if ticker is None or st.session_state.get("live_ticker_series") != series:
        stop_live_ticker()
        ticker = LiveTicker(interval=TICK_INTERVAL_SECONDS - TICK_SAFETY_MARGIN)
        st.session_state.live_ticker = ticker
        st.session_state.live_ticker_series = series

    if live_enabled and get_scoring_service().get_leaderboard():
        ticker.start()
    else:
        ticker.stop()
    return ticker


def on_series_change():
    stop_live_ticker()
    get_store().selected_series = st.session_state.series_select
    st.session_state.pop("edit_draft", None)
    st.session_state.pop("pending_delete", None)
    reset_add_draft()


def on_role_change():
    logger.info("Role switched to %s", st.session_state.role)
    if not can_edit_events(st.session_state.role):
        st.session_state.pop("edit_draft", None)
        st.session_state.pop("pending_delete", None)


# ================== DRAFT FORM HELPERS ==================

def _bump_revision(draft_key):
    st.session_state[f"{draft_key}_rev"] = st.session_state.get(f"{draft_key}_rev", 0) + 1


def _widget_key(draft_key, path):
    revision = st.session_state.get(f"{draft_key}_rev", 0)
    return f"{draft_key}_{revision}_" + "_".join(str(part) for part in path)


def _on_draft_change(draft_key, path, widget_key):
    st.session_state[draft_key] = EDITOR.set_field(
        st.session_state[draft_key], path, st.session_state[widget_key])


def _on_draft_append(draft_key, path):
    st.session_state[draft_key] = EDITOR.append_item(st.session_state[draft_key], path)
    _bump_revision(draft_key)


def _on_draft_remove(draft_key, path, index):
    st.session_state[draft_key] = EDITOR.remove_item(st.session_state[draft_key], path, index)
    _bump_revision(draft_key)


def draft_text(label, draft_key, path, area=False, **kwargs):
    """Text widget bound to one leaf of a draft record"""
    widget_key = _widget_key(draft_key, path)
    widget = st.text_area if area else st.text_input
    value = EDITOR.get_value(st.session_state[draft_key], path, "")
    return widget(label, value=str(value or ""), key=widget_key,
                  on_change=_on_draft_change, args=(draft_key, path, widget_key), **kwargs)


def draft_points(label, draft_key, path):
    widget_key = _widget_key(draft_key, path)
    value = EDITOR.get_value(st.session_state[draft_key], path, 0)
    try:
        value = int(value)
    except (TypeError, ValueError):
        value = 0
    return st.number_input(label, value=value, step=1, key=widget_key,
                           on_change=_on_draft_change, args=(draft_key, path, widget_key))


def draft_judges(draft_key, path=("judges",)):
    """Editable judge list"""
    st.markdown("**Judges**")
    judges = EDITOR.get_value(st.session_state[draft_key], path, []) or []
    for index in range(len(judges)):
        col1, col2 = st.columns([5, 1])
        with col1:
            draft_text(f"Judge {index + 1}", draft_key, (*path, index), label_visibility="collapsed",
                       placeholder=f"Judge {index + 1}")
        with col2:
            st.button("🗑️", key=f"{_widget_key(draft_key, path)}_remove_{index}",
                      on_click=_on_draft_remove, args=(draft_key, path, index))
    st.button("➕ Add Judge", key=f"{_widget_key(draft_key, path)}_add",
              on_click=_on_draft_append, args=(draft_key, path))


def draft_criteria(draft_key, path):
    """Editable criteria list at ``path``"""
    criteria = EDITOR.get_value(st.session_state[draft_key], path, []) or []
    for index in range(len(criteria)):
        col1, col2, col3, col4 = st.columns([3, 5, 2, 1])
        with col1:
            draft_text("Criteria Name", draft_key, (*path, index, "name"), placeholder="Criteria Name")
        with col2:
            draft_text("Description", draft_key, (*path, index, "description"), placeholder="Description")
        with col3:
            draft_points("Pts", draft_key, (*path, index, "points"))
        with col4:
            st.button("🗑️", key=f"{_widget_key(draft_key, path)}_remove_{index}",
                      on_click=_on_draft_remove, args=(draft_key, path, index))
    st.button("➕ Add Criterion", key=f"{_widget_key(draft_key, path)}_add",
              on_click=_on_draft_append, args=(draft_key, path))
    st.caption(f"Total: {section_total_points({'criteria': criteria}):g} pts")


# ================== EVENT ACTIONS ==================

def reset_add_draft():
    st.session_state.add_draft = {
        "name": "", "category": "", "new_category": "", "participants": "", "officer": "",
        "description": "", "mechanics": "", "competition_points": 0,
        "judges": [""],
        "criteria": [{"name": "", "description": "", "points": 0}],
    }
    _bump_revision("add_draft")


def add_event_from_draft():
    """Add the event described by the add-event draft"""
    draft = st.session_state.add_draft
    category = draft["new_category"] if draft["category"] == NEW_CATEGORY else draft["category"]
    try:
        event = get_event_service().create_event(
            name=draft["name"],
            category=category,
            participants=draft["participants"],
            officer=draft["officer"],
            judges=draft["judges"],
            description=draft["description"],
            mechanics=draft["mechanics"],
            criteria=draft["criteria"],
            competition_points=draft["competition_points"] or None,
        )
    except ValidationError as e:
        flash(False, str(e))
        return

    reset_add_draft()
    st.session_state.show_add_event = False
    flash(True, f"✅ Event '{event['name']}' added!")


def start_edit(event_id):
    event = get_event_service().get_event(event_id)
    if event is None:
        flash(False, "Event no longer exists")
        return
    st.session_state.edit_draft = event
    _bump_revision("edit_draft")


def save_edit():
    draft = st.session_state.pop("edit_draft", None)
    if draft is None:
        return
    if get_event_service().update_event(draft):
        flash(True, f"✅ Event '{draft.get('name', '')}' updated!")
    else:
        flash(False, "Event no longer exists; changes were not saved")


def cancel_edit():
    st.session_state.pop("edit_draft", None)


def confirm_delete():
    event_id = st.session_state.pop("pending_delete", None)
    if event_id is None:
        return
    if st.session_state.get("edit_draft", {}).get("id") == event_id:
        st.session_state.pop("edit_draft", None)
    if get_event_service().delete_event(event_id):
        flash(True, "🗑️ Event deleted")
    else:
        flash(False, "Event was already removed")


# ================== MAIN ==================

def main():
    st.set_page_config(
        page_title="SIMS Dashboard",
        page_icon="🏅",
        layout="wide",
        initial_sidebar_state="expanded"
    )
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    init_session()
    store = get_store()
    user = user_for_role(current_role())

    # Sidebar
    with st.sidebar:
        st.markdown("### 🏅 SIMS")
        st.caption("Management System")

        st.selectbox("Event", store.series_names, index=store.series_names.index(store.selected_series),
                     key="series_select", on_change=on_series_change)
        st.selectbox("Role", [role.value for role in UserRole], key="role",
                     format_func=str.title, on_change=on_role_change)

        st.markdown("### Statistics")
        for stat, value in get_store_stats().items():
            st.metric(stat, value)

        st.markdown("---")
        st.image(user["avatar"], width=48)
        st.markdown(f"**{user['name']}**  \n{user['email']}")

    # Header
    st.markdown(f"""
    <div style="margin-bottom: 20px;">
        <h2>Welcome, {get_first_name(user['name'])}! 👋</h2>
        <p style="color: #666;">{APP_TITLE}. Let's see what's happening today.</p>
    </div>
    """, unsafe_allow_html=True)

    show_main_interface()


def show_main_interface():
    """Show the tabs available to the current role"""
    pages = visible_pages(current_role())
    renderers = {
        "dashboard": show_dashboard,
        "leaderboard": show_leaderboard,
        "events": show_events,
        "rules": show_rules,
        "profile": show_profile,
        "admin": show_admin_panel,
    }

    tabs = st.tabs([f"{page['icon']} {page['name']}" for page in pages])
    for tab, page in zip(tabs, pages):
        with tab:
            renderers[page["page"]]()


# ================== DASHBOARD ==================

def show_dashboard():
    """Display stat cards, score chart and top players"""
    store = get_store()
    series = store.series()
    st.subheader(store.selected_series)

    if not series["stat_cards"]:
        st.info(f'No Data Available. There is no information to display for the "{store.selected_series}" '
                f'event yet.')
        return

    cols = st.columns(len(series["stat_cards"]))
    for col, card in zip(cols, series["stat_cards"]):
        with col:
            st.metric(card["team"], f"{card['points']} Points", delta=f"{card['change']}%")
            st.caption(f"{card['games']} games played")

    col1, col2 = st.columns([1, 2])

    with col1:
        st.markdown("#### Leaderboard Ranking")
        scoring = get_scoring_service()
        history_df = scoring.get_score_history()
        if len(history_df) > 0:
            fig = px.bar(
                history_df, x="team", y="score", color="series", barmode="group",
                category_orders={"series": ["Previous Score", "Current Score", "Historic Score"]},
                color_discrete_map={"Previous Score": "#cbd5e1", "Current Score": "#3b82f6",
                                    "Historic Score": "#e2e8f0"},
                labels={"team": "", "score": "Score", "series": ""},
            )
            fig.update_yaxes(range=[0, scoring.chart_axis_max()])
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("No leaderboard data yet")

    with col2:
        st.markdown("#### Top Players")
        for i, player in enumerate(series["top_players"]):
            c1, c2, c3 = st.columns([1, 4, 3])
            with c1:
                st.markdown(f"**#{i + 1}**")
            with c2:
                st.markdown(f"**{player['name']}**  \n{player['email']}")
            with c3:
                st.caption(f"Score {1800 - i * 250}")
                st.progress(max(0, 90 - i * 12) / 100)


# ================== LEADERBOARD ==================

def _highlight_live(row):
    style = "background-color: rgba(59, 130, 246, 0.15); font-weight: bold" if row["Live"] else ""
    return [style] * len(row)


@st.fragment(run_every=TICK_INTERVAL_SECONDS)
def show_live_leaderboard_table():
    """Leaderboard table; reruns on its own and ticks while live updates are on"""
    ticker = st.session_state.get("live_ticker")
    if ticker is not None:
        ticker.poll(get_scoring_service().advance_live_scores)

    st.caption(f"🔴 Live team: {get_scoring_service().get_live_team() or 'None'}")

    leaderboard_df = get_scoring_service().get_team_leaderboard()
    display_df = leaderboard_df.copy()
    display_df.columns = ["Rank", "Team", "Score", "Wins", "Losses", "Players", "Live"]
    display_df["Live"] = display_df["Live"].astype(bool)

    st.dataframe(display_df.style.apply(_highlight_live, axis=1),
                 use_container_width=True, hide_index=True)


def show_leaderboard():
    """Display the live leaderboard and team breakdowns"""
    st.subheader("🏆 Leaderboard")
    store = get_store()
    scoring = get_scoring_service()

    if not scoring.get_leaderboard():
        stop_live_ticker()
        st.warning(f'No leaderboard data available for "{store.selected_series}".')
        return

    live_enabled = st.toggle("🔴 Live updates", value=True, key="live_updates")
    sync_live_ticker(live_enabled)

    show_live_leaderboard_table()

    st.markdown("---")
    team_names = [team["name"] for team in scoring.get_leaderboard()]
    selected_team = st.selectbox("Select a team for details", sorted(team_names), key="team_detail_select")
    if selected_team:
        show_team_details(selected_team)


def show_team_details(team_name):
    details = get_scoring_service().get_team_details(team_name, current_role())
    if details is None:
        st.warning("Team not found")
        return

    st.markdown(f"### {team_name} - Details")
    col1, col2 = st.columns(2)

    with col1:
        st.markdown(f"#### ✅ Merits (+{details['merit_total']})")
        if details["merits"]:
            for merit in details["merits"]:
                st.markdown(f"**{merit['category']}**: {merit['description']} **+{merit['points']}**  \n"
                            f"Updated by: {merit['updated_by']}")
        else:
            st.caption("No merits recorded.")

    with col2:
        st.markdown(f"#### ⚠️ Demerits (-{details['demerit_total']})")
        if details["demerits"]:
            for demerit in details["demerits"]:
                st.markdown(f"**{demerit['reason']}** **-{demerit['points']}**  \n"
                            f"Contributor: {demerit['person']} | Updated by: {demerit['updated_by']}")
        else:
            st.caption("No demerits recorded.")

    st.markdown("#### 📊 Event Scores")
    if not details["event_scores"]:
        st.caption("No event scores recorded.")
        return

    scores_df = pd.DataFrame([{
        "Event": score["event_name"],
        "Placement": score["placement"],
        "Base Points": score["base_points"],
        "Competition Points": score["competition_points"],
    } for score in details["event_scores"]])
    st.dataframe(scores_df, use_container_width=True, hide_index=True)

    for score in details["event_scores"]:
        for card in score["scorecard"]:
            with st.expander(f"{score['event_name']} - scorecard by {card['judge']}"):
                for entry in card["scores"]:
                    st.markdown(f"- {entry['criteria']}: {entry['score']}")


# ================== EVENTS ==================

def show_events():
    """Display events grouped by category with officer/admin management"""
    st.subheader("📅 Events")
    store = get_store()
    service = get_event_service()
    editable = can_edit_events(current_role())

    show_flash()

    if not service.get_events() and not editable:
        st.info(f'No Events Scheduled. There are no events scheduled for "{store.selected_series}" yet.')
        return

    if editable:
        if st.button("➕ Add Event", type="primary", key="open_add_event"):
            st.session_state.show_add_event = not st.session_state.get("show_add_event", False)
        if st.session_state.get("show_add_event"):
            show_add_event_form()
        if st.session_state.get("edit_draft") is not None:
            show_edit_event_form()

    grouped = service.group_events_by_category()
    if not grouped:
        st.info("No events yet. Use Add Event to create one.")
        return

    for category, events in grouped.items():
        st.markdown(f"### {category}")
        cols = st.columns(3)
        for i, event in enumerate(events):
            with cols[i % 3]:
                show_event_card(event, editable)


def show_event_card(event, editable):
    with st.container(border=True):
        st.markdown(f"**{event['name']}**")
        st.caption(f"👤 Officer/s: {event.get('officer', '')}  \n👥 Participants: {event.get('participants', '')}")
        if event.get("judges"):
            st.caption(f"⚖️ Judges: {', '.join(event['judges'])}")

        with st.expander("View details"):
            show_event_details(event)

        if editable:
            col1, col2 = st.columns(2)
            with col1:
                st.button("✏️ Edit", key=f"edit_{event['id']}", on_click=start_edit, args=(event["id"],))
            with col2:
                if st.button("🗑️ Delete", key=f"delete_{event['id']}"):
                    st.session_state.pending_delete = event["id"]

            if st.session_state.get("pending_delete") == event["id"]:
                st.warning("Are you sure you want to delete this event? This action cannot be undone.")
                col1, col2 = st.columns(2)
                with col1:
                    st.button("Yes, delete", key=f"confirm_delete_{event['id']}", type="primary",
                              on_click=confirm_delete)
                with col2:
                    if st.button("Cancel", key=f"cancel_delete_{event['id']}"):
                        st.session_state.pop("pending_delete", None)
                        st.rerun()


def show_event_details(event):
    if event.get("description"):
        st.markdown(event["description"])

    sections = event.get("details") or []
    if not sections:
        st.caption("No mechanics or criteria published yet.")

    for section in sections:
        st.markdown(f"##### {section.get('title', '')}")
        if section.get("description"):
            st.markdown(section["description"])
        if section.get("guidelines"):
            st.markdown("\n".join(f"- {guideline}" for guideline in section["guidelines"]))
        if section.get("criteria"):
            criteria_df = pd.DataFrame(section["criteria"], columns=["name", "description", "points"])
            criteria_df.columns = ["Criteria", "Description", "Points"]
            criteria_df["Points"] = criteria_df["Points"].astype(str)
            st.dataframe(criteria_df, use_container_width=True, hide_index=True)
            st.markdown(f"**Total: {section_total_points(section):g} pts**")
        if section.get("competition_points"):
            st.markdown(f"**Competition Points:** {section['competition_points']}")


def show_add_event_form():
    """Add-event form; judges and criteria are edited as draft lists"""
    draft_key = "add_draft"
    categories = get_event_service().get_categories()

    with st.container(border=True):
        st.markdown("#### Add New Event")
        col1, col2 = st.columns(2)
        with col1:
            draft_text("Event Name", draft_key, ("name",))
            draft_text("No. of Participants", draft_key, ("participants",))
        with col2:
            options = [""] + categories + [NEW_CATEGORY]
            category_key = _widget_key(draft_key, ("category",))
            current = st.session_state[draft_key]["category"]
            st.selectbox("Category", options, index=options.index(current) if current in options else 0,
                         key=category_key, format_func=lambda c: c or "Select Category",
                         on_change=_on_draft_change, args=(draft_key, ("category",), category_key))
            if st.session_state[draft_key]["category"] == NEW_CATEGORY:
                draft_text("New Category Name", draft_key, ("new_category",))
            draft_text("Officer/s in Charge", draft_key, ("officer",))

        draft_text("General Description", draft_key, ("description",), area=True)
        draft_text("Mechanics / Guidelines", draft_key, ("mechanics",), area=True)

        draft_judges(draft_key)

        st.markdown("**Criteria**")
        draft_criteria(draft_key, ("criteria",))
        draft_points("Competition Points", draft_key, ("competition_points",))

        col1, col2 = st.columns(2)
        with col1:
            st.button("Add Event", type="primary", key="save_add_event", on_click=add_event_from_draft)
        with col2:
            if st.button("Cancel", key="cancel_add_event"):
                st.session_state.show_add_event = False
                st.rerun()


def show_edit_event_form():
    """Edit form over a draft copy of the event"""
    draft_key = "edit_draft"
    draft = st.session_state[draft_key]

    with st.container(border=True):
        st.markdown(f"#### Edit Event: {draft.get('name', '')}")
        col1, col2 = st.columns(2)
        with col1:
            draft_text("Event Name", draft_key, ("name",))
            draft_text("Category", draft_key, ("category",))
        with col2:
            draft_text("No. of Participants", draft_key, ("participants",))
            draft_text("Officer/s in Charge", draft_key, ("officer",))
        draft_text("General Description", draft_key, ("description",), area=True)

        draft_judges(draft_key)

        for section_index, section in enumerate(draft.get("details") or []):
            st.markdown(f"**{section.get('title') or f'Section {section_index + 1}'}**")
            draft_criteria(draft_key, ("details", section_index, "criteria"))

        col1, col2 = st.columns(2)
        with col1:
            st.button("Save Changes", type="primary", key="save_edit_event", on_click=save_edit)
        with col2:
            st.button("Cancel", key="cancel_edit_event", on_click=cancel_edit)


# ================== RULES ==================

def show_rules():
    """Display the rules document as accordion sections"""
    store = get_store()
    rules = store.series()["rules"]

    if not rules:
        st.info(f'No rules published for "{store.selected_series}" yet.')
        return

    st.subheader(f"📜 {rules['title']}")
    st.caption(rules["subtitle"])
    st.markdown(" ".join(f"`{sdg}`" for sdg in rules["sdgs"]))

    with st.expander("Objectives", expanded=True):
        st.markdown("\n".join(f"- {objective}" for objective in rules["objectives"]))

    with st.expander("House Rules"):
        for section in rules["house_rules"]:
            st.markdown(f"**{section['title']}**")
            st.markdown("\n".join(f"- {rule}" for rule in section["rules"]))

    with st.expander("Scoring System"):
        scoring = rules["scoring"]
        st.markdown("**Base Points**")
        st.dataframe(pd.DataFrame(scoring["base_points"]).rename(columns={"type": "Event Type", "points": "Points"}),
                     use_container_width=True, hide_index=True)
        st.markdown("**Placement**")
        st.dataframe(pd.DataFrame(scoring["placement"]).rename(columns={"place": "Place", "points": "Points"}),
                     use_container_width=True, hide_index=True)
        st.markdown("**Merit Points**")
        st.dataframe(pd.DataFrame(scoring["merit_points"]).rename(columns={"category": "Category", "points": "Points"}),
                     use_container_width=True, hide_index=True)

    with st.expander("Demerit Deductions"):
        st.dataframe(pd.DataFrame(rules["demerit_deductions"]).rename(
            columns={"offense": "Offense", "deduction": "Deduction"}),
            use_container_width=True, hide_index=True)

    with st.expander("Team Formation"):
        formation = rules["team_formation"]
        for leader in formation["leaders"]:
            st.markdown(f"**{leader['position']} ({leader['count']})**: {leader['description']}")
        st.markdown(f"**Advisers:** {formation['advisers']}")
        naming = formation["naming"]
        st.markdown(naming["description"])
        st.markdown("\n".join(f"- {team['name']}: {team['color']}" for team in naming["teams"]))
        st.caption(naming["format"])


# ================== PROFILE & ADMIN ==================

def show_profile():
    user = user_for_role(current_role())
    st.subheader("👤 Profile")
    col1, col2 = st.columns([1, 4])
    with col1:
        st.image(user["avatar"], width=96)
    with col2:
        st.markdown(f"### {user['name']}")
        st.markdown(f"{user['email']}")
        st.markdown(f"Role: **{user['role'].title()}**")


def show_admin_panel():
    """User management table (admin only)"""
    st.subheader("⚙️ Admin Panel")
    if not can_access_admin(current_role()):
        st.error("Access denied. You do not have permission to view this page.")
        return

    users_df = pd.DataFrame(list(MOCK_USERS.values()), columns=["id", "name", "email", "role"])
    users_df["role"] = users_df["role"].str.title()
    users_df.columns = ["ID", "Name", "Email", "Role"]
    st.dataframe(users_df, use_container_width=True, hide_index=True)

    report = get_store().validate_integrity()
    if report["valid"]:
        st.success("✅ Store integrity validation passed")
    else:
        st.error("❌ Store integrity issues found")
        for issue in report["issues"]:
            st.warning(issue)


if __name__ == "__main__":
    main()
