"""
Pending suggestions page - admin approval queue.
"""

import sys
from pathlib import Path

import streamlit as st

# Ensure project root in path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

from moviedb.core.metadata import PLACEHOLDER_POSTER
from moviedb.ui.utils import api_client
from moviedb.ui.utils.session_state import get_admin_token, init_session_state

init_session_state()
token = get_admin_token()

if not token:
    st.error("Admin access required")
    st.stop()

try:
    pending = api_client.list_pending(token)
except Exception as e:
    st.error(f"Failed to load suggestions: {api_client.error_message(e)}")
    st.stop()

st.title(f"📥 Pending Movie Suggestions ({len(pending)})")

if not pending:
    st.info("No pending movie suggestions")
    st.stop()

for movie in pending:
    with st.container(border=True):
        col1, col2, col3 = st.columns([1, 4, 1])
        with col1:
            st.image(movie.get("poster_path") or PLACEHOLDER_POSTER, width=80)
        with col2:
            st.markdown(f"**{movie['title']}**")
            st.caption(str(movie.get("year") or "N/A"))
            if movie.get("genres"):
                st.write(" ".join(f"`{genre}`" for genre in movie["genres"][:3]))
            st.caption(f"Status: {'Watched' if movie['status'] == 'watched' else 'Watchlist'}")
        with col3:
            if st.button("✅ Approve", key=f"approve_{movie['id']}", use_container_width=True):
                try:
                    api_client.approve_pending(token, movie["id"])
                    st.toast(f"{movie['title']} approved and added to collection!")
                    st.rerun()
                except Exception as e:
                    st.error(f"Failed to approve movie: {api_client.error_message(e)}")
            if st.button("❌ Reject", key=f"reject_{movie['id']}", use_container_width=True):
                try:
                    api_client.reject_pending(token, movie["id"])
                    st.toast(f"{movie['title']} rejected")
                    st.rerun()
                except Exception as e:
                    st.error(f"Failed to reject movie: {api_client.error_message(e)}")
