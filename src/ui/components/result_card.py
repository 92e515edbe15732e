"""
Result display components.
"""

import streamlit as st

from src.core.models import ResultView
from src.ui.state import ViewController


def _reset(controller: ViewController) -> None:
    """Reset the controller and give every form widget a fresh key."""
    controller.reset()
    st.session_state.form_nonce += 1
    st.session_state._image_file_id = None
    st.session_state._audio_file_id = None
    st.rerun()


def _render_tile(title: str, body: str | list[str], italic: bool = False) -> None:
    with st.container(border=True):
        st.markdown(f"**{title}**")
        if isinstance(body, list):
            st.markdown("\n".join(f"- {item}" for item in body))
        elif italic:
            st.markdown(f"_{body}_")
        else:
            st.write(body)


def render_result_card(result: ResultView) -> None:
    """Render a normalized result as a grid of tiles."""
    col1, col2 = st.columns(2)
    with col1:
        _render_tile("Image caption", result.caption)
        _render_tile("Likely causes", result.likely_causes)
        with st.container(border=True):
            st.markdown("**Confidence**")
            st.caption(result.confidence_label)
            st.progress(result.confidence_pct / 100)
    with col2:
        _render_tile("Observed", result.observed)
        _render_tile("Why", result.why)
        _render_tile("Follow-up question", result.question, italic=True)

    if result.transcript:
        with st.expander("Transcript"):
            st.write(result.transcript)


def render_result(controller: ViewController) -> None:
    """Render the result view with its Back / Analyze Another actions."""
    if st.button("← Back"):
        _reset(controller)

    st.subheader("Result")
    st.divider()
    if controller.result is not None:
        render_result_card(controller.result)

    if st.button("Analyze Another Image", type="primary", use_container_width=True):
        _reset(controller)
