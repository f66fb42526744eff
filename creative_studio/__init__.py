"""
Creative Studio AI - Modular Components

This package contains the core modules for Creative Studio AI:
- config: Constants, environment knobs, and data models
- errors: Error taxonomy and user-facing messages
- utils: Logging and upload encoding helpers
- gemini_client: Gemini API client construction
- credentials: Selected API key state
- image_generator: Text-to-image request (Imagen)
- video_animator: Image-to-video long-running job (Veo)
"""

# Lazy imports to avoid streamlit hot-reload issues
__all__ = [
    # Config
    "AspectRatio",
    "SourceImage",
    "GeneratedImage",
    "GeneratedVideo",
    "LOADING_MESSAGES",
    "ACCEPTED_IMAGE_TYPES",
    # Errors
    "GenerationError",
    "ValidationError",
    "is_invalid_credential_error",
    "describe_error",
    # Utils
    "file_to_base64",
    "validate_image_upload",
    # Credentials
    "CredentialStore",
    # Generation
    "generate_image",
    "generate_video",
]

_SOURCES = {
    "AspectRatio": "config",
    "SourceImage": "config",
    "GeneratedImage": "config",
    "GeneratedVideo": "config",
    "LOADING_MESSAGES": "config",
    "ACCEPTED_IMAGE_TYPES": "config",
    "GenerationError": "errors",
    "ValidationError": "errors",
    "is_invalid_credential_error": "errors",
    "describe_error": "errors",
    "file_to_base64": "utils",
    "validate_image_upload": "utils",
    "CredentialStore": "credentials",
    "generate_image": "image_generator",
    "generate_video": "video_animator",
}


def __getattr__(name):
    """Import on demand."""
    if name in _SOURCES:
        from importlib import import_module

        module = import_module(f".{_SOURCES[name]}", __name__)
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
