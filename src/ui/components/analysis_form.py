"""
Input form: image (required), context text and voice (optional).
"""

import streamlit as st

from src.services.capture import AudioInputDevice
from src.ui.components.recorder import render_voice
from src.ui.state import ViewController

_IMAGE_TYPES = ["png", "jpg", "jpeg", "webp", "gif"]


def render_form(controller: ViewController, device: AudioInputDevice) -> None:
    """Render the form view and handle the Analyze action."""
    nonce = st.session_state.form_nonce

    with st.container(border=True):
        st.subheader("ExplainMyWorld")
        st.caption("Upload an image + optional voice/text. Get a grounded “what” + “why”.")

        st.markdown("**Image** (required)")
        _render_image_picker(controller, nonce)

        st.markdown("**Context** (optional)")
        text = st.text_area(
            "Context",
            value=controller.text,
            placeholder="e.g., This is near campus at 5pm and it’s snowing.",
            key=f"context_{nonce}",
            label_visibility="collapsed",
        )
        if text != controller.text:
            controller.edit_text(text)

        st.markdown("**Voice** (optional)")
        render_voice(controller, device)

        label = "Analyzing..." if controller.loading else "✦ Analyze"
        if st.button(label, type="primary", disabled=not controller.can_submit):
            with st.spinner("Analyzing..."):
                controller.submit()
            st.rerun()

        if controller.error:
            st.error(controller.error)


def _render_image_picker(controller: ViewController, nonce: int) -> None:
    uploaded = st.file_uploader(
        "Choose an image",
        type=_IMAGE_TYPES,
        key=f"image_file_{nonce}",
        help="PNG / JPG / JPEG",
    )
    file_id = uploaded.file_id if uploaded is not None else None
    if file_id != st.session_state.get("_image_file_id"):
        st.session_state._image_file_id = file_id
        if uploaded is None:
            controller.clear_image()
        else:
            controller.select_image(
                uploaded.getvalue(),
                filename=uploaded.name,
                content_type=uploaded.type or "application/octet-stream",
            )

    if controller.image is not None and controller.image.preview is not None:
        preview = controller.previews.resolve(controller.image.preview)
        if preview is not None:
            st.image(preview, caption=controller.image.filename)
