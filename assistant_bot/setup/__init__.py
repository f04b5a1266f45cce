from .artifacts import (
    SetupError,
    SetupForm,
    check_ai_key_format,
    check_discord_token_format,
    render_deploy_script,
    render_env_file,
)

__all__ = [
    "SetupError",
    "SetupForm",
    "check_ai_key_format",
    "check_discord_token_format",
    "render_deploy_script",
    "render_env_file",
]
