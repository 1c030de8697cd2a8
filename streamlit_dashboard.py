from datetime import date

import streamlit as st
import pandas as pd
import plotly.express as px

from bagtag.config import DATA_FOLDER, MAX_SCORE, MIN_SCORE
from bagtag.core.changes import get_bagtag_changes
from bagtag.core.models import ChangeType
from bagtag.core.players import build_participants, set_score, toggle_selection
from bagtag.history import bagtag_timeline, round_statistics, round_winner, rounds_to_frame
from bagtag.service import (
    add_player,
    is_preview_current,
    load_history,
    load_roster,
    preview_round,
    record_round,
)
from bagtag.storage import BagtagStorage, JsonFileStore, StorageError, initialize_data

# --- Page Configuration ---
st.set_page_config(
    page_title="Bagtag Tracker",
    page_icon="🥏",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# --- Design System ---
ACCENT_COLORS = {
    "success": "#16a34a",  # Green - bagtag improved
    "danger": "#dc2626",   # Red - bagtag lost
    "neutral": "#6b7280",  # Gray - unchanged
}

CHANGE_COLORS = {
    ChangeType.UP: ACCENT_COLORS["success"],
    ChangeType.DOWN: ACCENT_COLORS["danger"],
    ChangeType.SAME: ACCENT_COLORS["neutral"],
}

# --- Leaderboard Flourishes ---
RANK_ICONS = {1: "👑", 2: "🥈", 3: "🥉"}


def format_bagtag(bagtag):
    """Bagtag label with an icon for the top three."""
    icon = RANK_ICONS.get(bagtag)
    return f"{icon} #{bagtag}" if icon else f"#{bagtag}"


def changes_to_frame(changes):
    """Table of a round's participants with their bagtag changes."""
    return pd.DataFrame([
        {
            "Bagtag": format_bagtag(c.participant.new_bagtag),
            "Player": c.participant.player_name,
            "Score": c.participant.score,
            "Old": f"#{c.participant.old_bagtag}",
            "Change": c.change_text,
        }
        for c in changes
    ])


def style_changes(df, changes):
    """Color the Change column by direction."""
    colors = [CHANGE_COLORS[c.change_type] for c in changes]
    return df.style.apply(
        lambda col: [f"color: {color}; font-weight: 700" for color in colors],
        subset=["Change"],
    )


def apply_plotly_style(fig):
    """Apply consistent styling to Plotly figures."""
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        legend=dict(title_text="", bgcolor="rgba(0,0,0,0)"),
        dragmode=False,  # Disable pan/zoom to prevent scroll hijacking on mobile
    )
    # Bagtag 1 at the top
    fig.update_yaxes(autorange="reversed", dtick=1, gridcolor="rgba(128, 128, 128, 0.4)")
    fig.update_xaxes(gridcolor="rgba(128, 128, 128, 0.4)")
    return fig


# --- Data Loading Functions ---
@st.cache_resource
def get_storage():
    """Storage shared across reruns; seeded with demo data on first use."""
    storage = BagtagStorage(JsonFileStore(DATA_FOLDER))
    initialize_data(storage)
    return storage


def reset_round_state():
    """Start a fresh round form; widget keys change so inputs are cleared."""
    st.session_state.round_form = st.session_state.get("round_form", 0) + 1
    st.session_state.selected = frozenset()
    st.session_state.preview = None


def flash(message):
    """Show ``message`` after the next rerun."""
    st.session_state.flash = message


def on_toggle_player(player_id):
    st.session_state.selected = toggle_selection(st.session_state.selected, player_id)


# --- Tabs ---
def render_standings(storage):
    players = load_roster(storage)
    st.subheader("Bagtag Standings")
    st.caption(f"{len(players)} players")

    if players:
        st.dataframe(
            pd.DataFrame([
                {"Bagtag": format_bagtag(p.current_bagtag), "Player": p.name, "Joined": p.join_date}
                for p in players
            ]),
            hide_index=True,
            use_container_width=True,
        )
    else:
        st.info("No players yet. Add the first one below.")

    with st.form("add_player", clear_on_submit=True):
        name = st.text_input("New player name")
        if st.form_submit_button("Add player"):
            try:
                player = add_player(storage, name)
            except ValueError as e:
                st.error(str(e))
            except StorageError as e:
                st.error(f"Could not add player: {e}")
            else:
                flash(f"{player.name} joined with bagtag #{player.current_bagtag}")
                st.rerun()


def render_new_round(storage):
    players = load_roster(storage)
    st.subheader("Record Round")

    if "round_form" not in st.session_state:
        reset_round_state()
    form_id = st.session_state.round_form

    # Step 1: Select players
    st.caption("Participants")
    cols = st.columns(3)
    for i, p in enumerate(players):
        with cols[i % 3]:
            st.checkbox(
                f"#{p.current_bagtag} {p.name}",
                key=f"pick_{form_id}_{p.id}",
                on_change=on_toggle_player,
                args=(p.id,),
            )

    # Step 2: Enter scores
    participants = build_participants(players, st.session_state.selected)
    cols = st.columns(3)
    for i, p in enumerate(participants):
        with cols[i % 3]:
            score = st.number_input(
                p.player_name,
                min_value=0,
                max_value=999,
                value=None,
                step=1,
                key=f"score_{form_id}_{p.player_id}",
                help=f"Final score ({MIN_SCORE}-{MAX_SCORE})",
            )
        participants = set_score(participants, p.player_id, None if score is None else int(score))

    # Step 3: Preview
    if st.button("Preview", key="preview_round", disabled=len(participants) == 0):
        st.session_state.preview = preview_round(participants)

    preview = st.session_state.preview
    if preview is None:
        return
    if not is_preview_current(preview, participants):
        # Selection or scores changed since the preview was made
        st.session_state.preview = None
        st.info("Participants or scores changed. Preview the round again before saving.")
        return

    if preview["errors"]:
        st.error("\n".join(f"- {e}" for e in preview["errors"]))
        return

    changes = preview["changes"]
    st.dataframe(style_changes(changes_to_frame(changes), changes), hide_index=True, use_container_width=True)

    if st.button("Save round", key="save_round", type="primary"):
        try:
            result = record_round(storage, preview["entered"])
        except StorageError as e:
            st.error(f"Could not save the round: {e}")
            return
        if result["errors"]:
            st.error("\n".join(f"- {e}" for e in result["errors"]))
            return
        reset_round_state()
        flash("Round saved! Bagtags are updated.")
        st.rerun()


def render_history(storage):
    rounds = load_history(storage)
    st.subheader("History")

    if not rounds:
        st.info("No rounds recorded yet.")
        return

    timeline = bagtag_timeline(rounds)
    if not timeline.empty:
        fig = px.line(timeline, x="date", y="bagtag", color="player_name", markers=True)
        st.plotly_chart(apply_plotly_style(fig), use_container_width=True)

    for round_ in rounds:
        winner = round_winner(round_)
        label = f"{round_.date:%d %b %Y} · {len(round_.participants)} players"
        if winner is not None:
            label += f" · {format_bagtag(winner.new_bagtag)} {winner.player_name} ({winner.score})"

        with st.expander(label):
            changes = get_bagtag_changes(round_.participants)
            st.dataframe(style_changes(changes_to_frame(changes), changes), hide_index=True, use_container_width=True)

            stats = round_statistics(round_)
            c1, c2, c3, c4 = st.columns(4)
            c1.metric("Participants", stats["participants"])
            c2.metric("Best score", stats["best_score"])
            c3.metric("Worst score", stats["worst_score"])
            c4.metric("Average", stats["average_score"])

    # All results in one table
    results = rounds_to_frame(rounds)
    with st.expander("All results"):
        st.dataframe(results, hide_index=True, use_container_width=True)
    st.download_button(
        "Download results (CSV)",
        data=results.to_csv(index=False),
        file_name=f"bagtag_results_{date.today():%Y%m%d}.csv",
        mime="text/csv",
    )


# --- Main App ---
def main():
    st.title("🥏 Bagtag Tracker")
    st.caption(f"Today: {date.today():%d %b %Y}")

    message = st.session_state.pop("flash", None)
    if message:
        st.success(message)

    storage = get_storage()

    tab_standings, tab_round, tab_history = st.tabs(["Standings", "New Round", "History"])
    with tab_standings:
        render_standings(storage)
    with tab_round:
        render_new_round(storage)
    with tab_history:
        render_history(storage)


if __name__ == "__main__":
    main()
