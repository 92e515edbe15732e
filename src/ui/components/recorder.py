"""
Voice input component — record via the browser or upload an audio file.

States: idle -> recording -> idle (audio attached)
"""

import logging

import streamlit as st

from src.services.capture import AudioInputDevice
from src.ui.state import ViewController

logger = logging.getLogger(__name__)

_AUDIO_TYPES = ["wav", "mp3", "m4a", "webm", "ogg", "flac"]


def render_voice(controller: ViewController, device: AudioInputDevice) -> None:
    """Render the optional voice section of the form."""
    nonce = st.session_state.form_nonce

    col_rec, col_or, col_file = st.columns([2, 1, 3])
    with col_rec:
        if controller.is_recording:
            if st.button("■ Stop Recording", type="secondary", disabled=controller.loading):
                controller.stop_recording()
                st.rerun()
        elif st.button("🎙 Start Recording", disabled=controller.loading):
            controller.start_recording()
            st.rerun()
    with col_or:
        st.markdown("or")
    with col_file:
        _render_audio_upload(controller, nonce)

    if controller.is_recording:
        _render_recording(controller, device, nonce)

    if controller.notice:
        st.info(controller.notice)

    if controller.is_recording:
        st.caption("Recording...")
    elif controller.audio is not None:
        st.caption(f"Audio: {controller.audio.filename}")


def _render_recording(controller: ViewController, device: AudioInputDevice, nonce: int) -> None:
    """Show the browser recorder; a finished clip stops the capture session."""
    clip = st.audio_input("Record audio", key=f"audio_input_{nonce}")
    if clip is None:
        return
    device.feed(clip.getvalue())
    asset = controller.stop_recording()
    if asset is not None:
        logger.info("Recorded %d bytes from the browser", asset.size)
    st.rerun()


def _render_audio_upload(controller: ViewController, nonce: int) -> None:
    uploaded = st.file_uploader(
        "⬆ Choose File",
        type=_AUDIO_TYPES,
        key=f"audio_file_{nonce}",
        disabled=controller.loading,
    )
    file_id = uploaded.file_id if uploaded is not None else None
    if file_id == st.session_state.get("_audio_file_id"):
        return
    st.session_state._audio_file_id = file_id
    if uploaded is None:
        controller.clear_uploaded_audio()
        return
    controller.select_audio(
        uploaded.getvalue(),
        filename=uploaded.name,
        content_type=uploaded.type or "application/octet-stream",
    )
