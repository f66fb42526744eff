"""
Streamlit frontend for Creative Studio AI.

Two tabs: generate a still image from a prompt (Imagen), and animate an
uploaded image into a short video (Veo).

Environment Variables:
- GEMINI_API_KEY or GOOGLE_GENAI_API_KEY: (Optional) Pre-selects the API key
- IMAGEN_MODEL: (Optional) Image model (default: imagen-4.0-generate-001)
- VEO_MODEL: (Optional) Video model (default: veo-3.1-fast-generate-preview)
- VEO_POLL_INTERVAL: (Optional) Seconds between video status checks (default: 10)
- VEO_MAX_POLL_ATTEMPTS: (Optional) Status checks before giving up, 0 = no limit (default: 60)
- LOG_LEVEL: (Optional) Logging level (default: INFO)
"""

import asyncio

import streamlit as st
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from creative_studio import (  # noqa: E402
    ACCEPTED_IMAGE_TYPES,
    LOADING_MESSAGES,
    AspectRatio,
    CredentialStore,
    GenerationError,
    describe_error,
    file_to_base64,
    generate_image,
    generate_video,
    is_invalid_credential_error,
    validate_image_upload,
)
from creative_studio.utils import get_logger  # noqa: E402

logger = get_logger("app")

# ---------- Streamlit Page Configuration ----------
st.set_page_config(
    page_title="Creative Studio AI",
    page_icon="🎨",
    layout="wide",
)

credentials = CredentialStore(st.session_state)
for key in ("image_busy", "video_busy"):
    st.session_state.setdefault(key, False)
for key in ("image_result", "image_error", "video_result", "video_error"):
    st.session_state.setdefault(key, None)

# ---------- Main UI ----------
st.title("🎨 Creative Studio AI")
st.markdown("_Bring your ideas to life with generative images and videos._")


def _api_key_form(form_key: str) -> None:
    """Password field + "Select API Key" button; reruns once a key is chosen."""
    with st.form(form_key, clear_on_submit=True):
        key_input = st.text_input(
            "Google AI API Key",
            type="password",
            help="Your API key from Google AI Studio (ai.google.dev). Video generation needs Veo access.",
        )
        if st.form_submit_button("Select API Key"):
            try:
                asyncio.run(credentials.select_key(key_input))
            except GenerationError as exc:
                st.error(describe_error(exc))
            else:
                st.rerun()


# ---------- Sidebar: API Key ----------
with st.sidebar:
    st.markdown("**API Key**")
    if credentials.has_selected_key():
        st.caption("✅ API key selected")
    else:
        st.caption("⚠️ No API key selected")
    _api_key_form("api_key_form")
    if credentials.has_selected_key() and st.button("Forget API Key"):
        credentials.clear()
        st.rerun()
    st.markdown("[Billing for Veo](https://ai.google.dev/gemini-api/docs/billing)")


def _handle_failure(exc: Exception, error_key: str) -> None:
    """Show one message per failure; reset the key if the service rejected it."""
    if is_invalid_credential_error(exc):
        credentials.clear()
    st.session_state[error_key] = describe_error(exc)
    logger.error(f"{error_key}: {exc}")


image_tab, video_tab = st.tabs(["🖼️ Generate Image", "🎬 Animate Image"])

# ---------- Tab 1: Generate Image ----------
with image_tab:
    prompt = st.text_area(
        "Describe the image you want to create",
        placeholder="e.g., A cinematic shot of a futuristic city at sunset, with flying cars and neon lights.",
        height=100,
        disabled=st.session_state["image_busy"],
    )
    generate_clicked = st.button(
        "Generate",
        type="primary",
        disabled=st.session_state["image_busy"] or not prompt.strip(),
        key="generate_image",
    )

    if generate_clicked:
        st.session_state["image_busy"] = True
        st.session_state["image_error"] = None
        st.session_state["image_result"] = None
        try:
            with st.spinner("Creating your vision..."):
                st.session_state["image_result"] = asyncio.run(
                    generate_image(prompt, api_key=credentials.api_key)
                )
        except GenerationError as exc:
            _handle_failure(exc, "image_error")
        except Exception as exc:
            logger.exception("Unexpected image generation failure")
            _handle_failure(exc, "image_error")
        finally:
            st.session_state["image_busy"] = False

    if st.session_state["image_error"]:
        st.error(st.session_state["image_error"])

    image_result = st.session_state["image_result"]
    if image_result is not None:
        st.image(image_result.data, caption=prompt or None, width="stretch")
        st.download_button(
            "📥 Download image",
            data=image_result.data,
            file_name="creative-studio.jpg",
            mime=image_result.mime_type,
        )
    elif not st.session_state["image_error"]:
        st.info("💡 Your generated image will appear here.")

# ---------- Tab 2: Animate Image ----------
with video_tab:
    if not credentials.has_selected_key():
        st.subheader("API Key Required for Veo")
        st.markdown(
            "Video generation requires a Google AI API key with access to the Veo model. "
            "Please select your key to proceed. You can manage billing in the "
            "[Google AI documentation](https://ai.google.dev/gemini-api/docs/billing)."
        )
        _api_key_form("video_api_key_form")
        if st.session_state["video_error"]:
            st.error(st.session_state["video_error"])
    else:
        busy = st.session_state["video_busy"]
        col_controls, col_result = st.columns(2)

        with col_controls:
            uploaded = st.file_uploader(
                "1. Upload an image",
                type=ACCEPTED_IMAGE_TYPES,
                help="PNG, JPG, GIF or WEBP",
                disabled=busy,
            )
            if uploaded:
                st.image(uploaded, caption=f"Selected: {uploaded.name}")

            video_prompt = st.text_area(
                "2. Describe the animation (optional)",
                placeholder="e.g., Make the clouds move, gentle breeze.",
                height=80,
                disabled=busy,
            )
            ratio = st.radio(
                "3. Select Aspect Ratio",
                list(AspectRatio),
                format_func=lambda r: f"{r.value} ({r.label})",
                horizontal=True,
                disabled=busy,
            )
            animate_clicked = st.button(
                "🚀 Generate Video",
                type="primary",
                disabled=busy or not uploaded,
                width="stretch",
            )

        with col_result:
            if animate_clicked:
                st.session_state["video_busy"] = True
                st.session_state["video_error"] = None
                st.session_state["video_result"] = None
                try:
                    validate_image_upload(uploaded)
                    source_image = file_to_base64(uploaded)
                    with st.status(LOADING_MESSAGES[0], expanded=True) as status:

                        def _on_poll(attempt, operation):
                            message = LOADING_MESSAGES[attempt % len(LOADING_MESSAGES)]
                            if operation.done:
                                status.write(f"✅ Status check {attempt}: rendering finished, downloading...")
                            else:
                                status.update(label=message)
                                status.write(f"⏳ Status check {attempt}: still rendering...")

                        st.session_state["video_result"] = asyncio.run(
                            generate_video(
                                video_prompt,
                                source_image,
                                ratio,
                                api_key=credentials.api_key,
                                on_poll=_on_poll,
                            )
                        )
                        status.update(label="✅ Your video is ready.", state="complete")
                except GenerationError as exc:
                    _handle_failure(exc, "video_error")
                except Exception as exc:
                    logger.exception("Unexpected video generation failure")
                    _handle_failure(exc, "video_error")
                finally:
                    st.session_state["video_busy"] = False
                if not credentials.has_selected_key():
                    st.rerun()

            if st.session_state["video_error"]:
                st.error(st.session_state["video_error"])

            video_result = st.session_state["video_result"]
            if video_result is not None:
                st.video(video_result.data, format=video_result.mime_type)
                st.download_button(
                    "📥 Download video",
                    data=video_result.data,
                    file_name="creative-studio.mp4",
                    mime=video_result.mime_type,
                )
            elif not st.session_state["video_error"]:
                st.info("💡 Your generated video will appear here.")

st.caption("Powered by Google Gemini. Built with Streamlit.")
