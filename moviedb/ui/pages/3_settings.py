"""
Settings page - admin login, export/import, clear-all and password change.
"""

import json
import sys
from datetime import date
from pathlib import Path

import streamlit as st

# Ensure project root in path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

from moviedb.ui.utils import api_client
from moviedb.ui.utils.session_state import (
    clear_admin_session,
    get_admin_token,
    init_session_state,
    set_admin_session,
)

init_session_state()
token = get_admin_token()

st.title("⚙️ Settings")

# About
try:
    stats = api_client.get_stats()
    st.subheader("About")
    st.write("MovieDB - Personal Movie Library")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Movies", stats["total"])
    col2.metric("Watched", stats["watched_count"])
    col3.metric("Watchlist", stats["watchlist_count"])
except Exception as e:
    st.error(f"Failed to load collection: {api_client.error_message(e)}")

st.divider()

# Export is available to everyone
try:
    st.download_button(
        "⬇️ Export data",
        data=api_client.export_movies(),
        file_name=f"moviedb-export-{date.today().isoformat()}.json",
        mime="application/json",
    )
except Exception as e:
    st.error(f"Failed to export data: {api_client.error_message(e)}")

st.divider()

if not token:
    st.subheader("Admin Login")
    with st.form("admin_login"):
        password = st.text_input("Password", type="password")
        if st.form_submit_button("Login"):
            if not password.strip():
                st.error("Please enter a password")
            else:
                try:
                    session = api_client.login(password.strip())
                    set_admin_session(session["token"], session["expires_at"])
                    st.toast("Logged in as admin successfully!")
                    st.rerun()
                except Exception as e:
                    st.error(api_client.error_message(e))
    st.stop()

st.subheader("Admin")
if st.button("Logout"):
    try:
        api_client.logout(token)
    finally:
        clear_admin_session()
    st.toast("Logged out successfully")
    st.rerun()

# Import
uploaded = st.file_uploader("Import data (JSON)", type=["json"])
if uploaded is not None and st.button("Import"):
    try:
        records = json.loads(uploaded.getvalue().decode("utf-8"))
        count = api_client.import_movies(token, records)
        st.success(f"{count} movies imported successfully!")
    except (UnicodeDecodeError, json.JSONDecodeError):
        st.error("Failed to import data. Check JSON format.")
    except Exception as e:
        st.error(f"Failed to import data: {api_client.error_message(e)}")

# Change password
with st.expander("Change Admin Password"):
    with st.form("change_password"):
        current = st.text_input("Current Password", type="password")
        new = st.text_input("New Password", type="password")
        confirm = st.text_input("Confirm New Password", type="password")
        if st.form_submit_button("Update Password"):
            if not current or not new or not confirm:
                st.error("All fields are required")
            elif new != confirm:
                st.error("New passwords do not match")
            else:
                try:
                    new_hash = api_client.change_password(token, current, new, confirm)
                    st.success("Password updated!")
                    st.code(f"ADMIN_PASSWORD_HASH={new_hash}")
                except Exception as e:
                    st.error(api_client.error_message(e))

# Clear all data
with st.expander("⚠️ Danger Zone"):
    st.warning(
        "This will permanently delete ALL movies from your database. This action cannot be undone!"
    )
    confirm_text = st.text_input("Type DELETE to confirm", placeholder="Type DELETE to confirm")
    if st.button("Delete Everything", type="primary"):
        if confirm_text != "DELETE":
            st.error("Confirmation text does not match")
        else:
            try:
                count = api_client.clear_movies(token, confirm_text)
                st.success(f"All data cleared successfully! ({count} movies deleted)")
            except Exception as e:
                st.error(f"Failed to clear data: {api_client.error_message(e)}")
