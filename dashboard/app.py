"""
Streamlit Dashboard for the Points Projection API
Simple calculator: enter a player's line and context, see the projection
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd
import streamlit as st
from dashboard.utils import api_get, api_post

FACTOR_LABELS = {
    "home_away": "Home/Away",
    "game_total": "Game Total (OU)",
    "team_total": "Team Total (OU)",
    "def_vs_pos": "Def vs Position",
    "recent_form": "Recent Form",
    "minutes_trend": "Minutes Trend",
    "pace": "Pace",
    "b2b": "Back-to-Back",
}

st.set_page_config(
    page_title="Points Projection",
    page_icon="🏀",
    layout="centered",
)


# ==============================================================================
# PAGE
# ==============================================================================

st.title("🏀 Points Projection")

profiles = (api_get("/api/projections/profiles") or {}).get("profiles", ["default"])
profile = st.sidebar.selectbox("Calibration profile", profiles)

cfg = api_get("/api/projections/config", params={"profile": profile})
if cfg:
    for warning in cfg.get("warnings", []):
        st.sidebar.warning(warning)
    with st.sidebar.expander("Calibration values"):
        st.json(cfg["config"])

with st.form("projection"):
    player_name = st.text_input("Player name")

    col1, col2 = st.columns(2)
    player_line = col1.number_input("Sportsbook line (points)", value=20.5, step=0.5)
    season_avg = col2.number_input("Season avg points", value=20.0, step=0.1)

    is_home = col1.checkbox("Home game", value=True)
    is_back_to_back = col2.checkbox("Back-to-back")

    game_total_ou = col1.number_input("Game total O/U", value=229.0, step=0.5)
    team_total_ou = col2.number_input("Team total O/U", value=114.5, step=0.5)
    opp_pts_allowed_vs_pos = col1.number_input(
        "Opp points allowed to position", value=23.0, step=0.1
    )
    matchup_pace = col2.number_input("Matchup pace (poss/team)", value=99.5, step=0.1)

    recent_avg = col1.number_input(
        "Recent avg points (set = season avg to ignore)", value=20.0, step=0.1
    )
    season_avg_minutes = col2.number_input("Season avg minutes", value=32.0, step=0.5)
    expected_minutes = col1.number_input("Expected minutes", value=32.0, step=0.5)

    submitted = st.form_submit_button("Project")

if submitted:
    if player_name.strip() == "":
        st.warning("Please enter a player name first.")
    else:
        payload = {
            "player_name": player_name.strip(),
            "player_line": player_line,
            "season_avg": season_avg,
            "is_home": is_home,
            "game_total_ou": game_total_ou,
            "team_total_ou": team_total_ou,
            "opp_pts_allowed_vs_pos": opp_pts_allowed_vs_pos,
            "recent_avg": recent_avg,
            "season_avg_minutes": season_avg_minutes,
            "expected_minutes": expected_minutes,
            "matchup_pace": matchup_pace,
            "is_back_to_back": is_back_to_back,
        }
        result = api_post("/api/projections", payload, params={"profile": profile})

        if result:
            st.divider()
            st.subheader(f"📊 {result['player_name']}")

            m1, m2, m3 = st.columns(3)
            m1.metric("Base (blend)", f"{result['base_points']:.2f}")
            m2.metric(
                "Final multiplier",
                f"{result['final_multiplier']:.4f}",
                delta=f"{(result['final_multiplier'] - 1.0) * 100:+.1f}%",
            )
            m3.metric("Projected points", f"{result['projection']:.2f}")

            if result["was_capped"]:
                st.info(
                    f"Multiplier capped: uncapped value was "
                    f"{result['uncapped_multiplier']:.4f}"
                )

            df = pd.DataFrame(
                [
                    {"Factor": FACTOR_LABELS.get(name, name), "Multiplier": value}
                    for name, value in result["multipliers"].items()
                ]
            )
            st.dataframe(
                df.style.format({"Multiplier": "{:.4f}"}),
                hide_index=True,
                use_container_width=True,
            )
