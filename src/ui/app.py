"""
ExplainMyWorld Streamlit UI — main entry point.

Run with: ``streamlit run src/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from src.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (src/ui/),
# which removes the project root needed for absolute ``src.*`` imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import logging  # noqa: E402

import streamlit as st  # noqa: E402

from src.core.config import get_settings  # noqa: E402
from src.core.models import ViewState  # noqa: E402
from src.services.capture import AudioInputDevice, CaptureSession  # noqa: E402
from src.ui.api_client import get_api_client  # noqa: E402
from src.ui.components.analysis_form import render_form  # noqa: E402
from src.ui.components.result_card import render_result  # noqa: E402
from src.ui.state import ViewController  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="ExplainMyWorld",
    page_icon="✦",
    layout="centered",
)

_settings = get_settings()
logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "api_base_url": _settings.api_base_url,
    "form_nonce": 0,
    "_image_file_id": None,
    "_audio_file_id": None,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("✦ ExplainMyWorld")
    st.caption("Point at something, ask why")
    st.divider()
    st.session_state.api_base_url = st.text_input(
        "Analysis service URL",
        value=st.session_state.api_base_url,
        help=f"Base URL of the analysis service (default: {_settings.api_base_url})",
    )

    _client = get_api_client(st.session_state.api_base_url, _settings.request_timeout)
    _conn_ok, _conn_msg = _client.check_connection()
    if _conn_ok:
        st.success(f"Service: {_conn_msg}")
    else:
        st.error(f"Service: {_conn_msg}")

# ---------------------------------------------------------------------------
# Controller (one per browser session; rebuilt when the service URL changes)
# ---------------------------------------------------------------------------
_controller = st.session_state.get("controller")
if _controller is None or st.session_state.get("_controller_url") != _client.base_url:
    if _controller is not None:
        _controller.reset()
        st.session_state.form_nonce += 1
        st.session_state._image_file_id = None
        st.session_state._audio_file_id = None
    st.session_state.audio_device = AudioInputDevice()
    st.session_state.controller = ViewController(
        client=_client,
        capture=CaptureSession(st.session_state.audio_device),
    )
    st.session_state._controller_url = _client.base_url

controller: ViewController = st.session_state.controller

if controller.view is ViewState.form:
    render_form(controller, st.session_state.audio_device)
else:
    render_result(controller)
