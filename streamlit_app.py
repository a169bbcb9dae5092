import html

import streamlit as st

from vibe_lister.ui_client import ApiError, VibeListerClient

GENRES = [
    "pop", "rock", "hip hop", "r&b", "edm", "jazz", "classical", "metal",
    "blues", "reggae", "country", "soul", "punk", "latin", "indie", "lofi",
]

# ----------------------------
# Streamlit page config
# ----------------------------
st.set_page_config(
    page_title="Vibe Lister",
    page_icon="🎧",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
:root {
    --primary: #1DB954;
    --primary-hover: #1ed760;
    --bg: #121212;
    --card-bg: #1e1e1e;
    --text: #ffffff;
    --text-secondary: #b3b3b3;
    --border-radius: 8px;
}

.stApp { background: var(--bg); color: var(--text); }

.stButton button {
    background-color: var(--primary);
    color: white;
    border-radius: var(--border-radius);
    font-weight: 600;
    border: none;
    width: 100%;
}

.stButton button:hover { background-color: var(--primary-hover); }

.header-title {
    text-align: center;
    font-size: 2.2rem;
    font-weight: 700;
    color: var(--primary);
}

.header-subtitle {
    text-align: center;
    color: var(--text-secondary);
    margin-bottom: 1.5rem;
}

.track-row {
    background: var(--card-bg);
    padding: .6rem 1rem;
    border-radius: var(--border-radius);
    margin-bottom: .4rem;
}
</style>
""", unsafe_allow_html=True)

st.markdown("""
<div class="header-title">Vibe Lister</div>
<div class="header-subtitle">Tell us the mood, we'll bring the songs</div>
""", unsafe_allow_html=True)

api = VibeListerClient()

# ----------------------------
# OAuth return: ?code=... lands back here
# ----------------------------
code = st.query_params.get("code")
if code and not st.session_state.get("sid"):
    try:
        st.session_state["sid"] = api.exchange_code(code)
        st.success("Connected to Spotify.")
    except ApiError as e:
        st.error(f"Spotify connection failed: {e.message}")
    st.query_params.clear()

# ----------------------------
# Sidebar Inputs
# ----------------------------
with st.sidebar:
    st.subheader("Playlist Settings")
    mood = st.text_area("Describe your mood", placeholder="E.g. 'rainy sunday, cozy but hopeful'")
    genres = st.multiselect("Genres (optional)", GENRES)
    song_count = st.slider("Songs", 5, 30, 10)
    build_btn = st.button("Generate Playlist", use_container_width=True)

    st.divider()
    if st.session_state.get("sid"):
        st.caption("Spotify connected")
        if st.button("Disconnect Spotify", use_container_width=True):
            try:
                api.logout(st.session_state["sid"])
            except ApiError:
                pass
            st.session_state.pop("sid", None)
            st.rerun()
    else:
        try:
            st.link_button("Connect Spotify", api.auth_url(), use_container_width=True)
        except (ApiError, OSError) as e:
            st.caption(f"Spotify login unavailable: {e}")

# ----------------------------
# Generate
# ----------------------------
if build_btn:
    if not mood.strip():
        st.warning("Tell us a mood first.")
    else:
        with st.spinner("Curating your playlist..."):
            try:
                st.session_state["playlist"] = api.generate_playlist(mood, song_count, genres)
            except ApiError as e:
                st.error(e.message)

playlist = st.session_state.get("playlist")
if playlist:
    st.subheader(playlist["playlistName"])
    if not playlist["tracks"]:
        st.warning("No songs could be matched on Spotify. Try a different mood.")
    for t in playlist["tracks"]:
        st.markdown(
            f"<div class='track-row'><a href='{html.escape(t['url'])}' target='_blank'>"
            f"{html.escape(t['title'])}</a> · {html.escape(t['artist'])}</div>",
            unsafe_allow_html=True,
        )

    if playlist["tracks"] and st.session_state.get("sid"):
        if st.button("Save to Spotify"):
            with st.spinner("Saving..."):
                try:
                    res = api.create_playlist(
                        st.session_state["sid"], playlist["playlistName"], playlist["tracks"]
                    )
                    st.success(f"Added {res['tracksAdded']} tracks.")
                    st.link_button("Open in Spotify", res["playlistUrl"])
                except ApiError as e:
                    if e.status_code == 401:
                        st.session_state.pop("sid", None)
                    st.error(e.message)
