"""
Deployment artifacts for a new bot install.

Format checks here are local sanity checks only; nothing is sent to Discord
or the AI provider.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
import shlex


MAX_PREFIX_LENGTH = 3
AI_KEY_PLACEHOLDER = "your_groq_api_key_here"


class SetupError(Exception):
    """Raised when the form lacks what an artifact needs."""


@dataclass
class SetupForm:
    bot_name: str = "AI Assistant Bot"
    bot_description: str = "An intelligent Discord bot powered by AI that can help with various tasks"
    bot_prefix: str = "!"
    activity_type: str = "playing"
    activity_text: str = "with slash commands"
    presence_status: str = "online"
    mobile: bool = False
    discord_token: str = ""
    ai_api_key: str = ""

    def __post_init__(self) -> None:
        self.bot_prefix = self.bot_prefix[:MAX_PREFIX_LENGTH]


def check_discord_token_format(token: str) -> tuple[bool, str]:
    token = token.strip()
    if not token:
        return False, "Please enter a Discord token"
    if len(token) < 50 or "." not in token:
        return False, "Invalid Discord token format"
    return True, "Discord token format looks valid"


def check_ai_key_format(api_key: str) -> tuple[bool, str]:
    api_key = api_key.strip()
    if not api_key:
        return False, "Please enter an AI API key"
    if len(api_key) < 20 or not api_key.startswith("gsk_"):
        return False, "Invalid GROQ API key format - should start with gsk_"
    return True, "AI API key format looks valid"


def render_env_file(form: SetupForm) -> str:
    if not form.discord_token:
        raise SetupError("Discord token is required to generate .env file")

    return f"""# Discord Bot Configuration
DISCORD_TOKEN={form.discord_token}

# AI API Configuration (Optional - for AI features)
AI_API_KEY={form.ai_api_key or AI_KEY_PLACEHOLDER}

# Bot Settings
BOT_PREFIX={form.bot_prefix}
BOT_NAME={form.bot_name}
BOT_DESCRIPTION={form.bot_description}

# Initial presence
BOT_ACTIVITY_TYPE={form.activity_type}
BOT_ACTIVITY_TEXT={form.activity_text}
BOT_STATUS={form.presence_status}
BOT_MOBILE={"true" if form.mobile else "false"}

# Status Examples:
# - online, idle, dnd, invisible
# - playing, watching, listening, streaming, competing
"""


_SCRIPT_TEMPLATE = r"""#!/bin/bash
# Discord Bot Deployment Script
# Generated by assistant_bot.setup

echo "🚀 Discord Bot Deployment Script"
echo __BOT_LINE__
echo __DESCRIPTION_LINE__
echo ""

RED='\033[0;31m'
GREEN='\033[0;32m'
BLUE='\033[0;34m'
NC='\033[0m'

print_status() {
    echo -e "${BLUE}[$(date '+%H:%M:%S')]${NC} $1"
}

print_success() {
    echo -e "${GREEN}✅ $1${NC}"
}

print_error() {
    echo -e "${RED}❌ $1${NC}"
}

if ! command -v python3 &> /dev/null; then
    print_error "Python 3 is not installed. Please install Python 3.10+ first."
    exit 1
fi

if ! python3 -c 'import sys; sys.exit(0 if sys.version_info >= (3, 10) else 1)'; then
    print_error "Python 3.10+ required. Current version: $(python3 --version)"
    exit 1
fi

print_status "Creating virtual environment..."
python3 -m venv .venv || { print_error "Failed to create virtual environment"; exit 1; }
source .venv/bin/activate

print_status "Installing bot..."
pip install --upgrade pip > /dev/null
pip install . || { print_error "Installation failed"; exit 1; }
print_success "Installed"

cat > .env.example << 'ENVEOF'
DISCORD_TOKEN=your_discord_token_here
AI_API_KEY=your_groq_api_key_here
BOT_PREFIX=__BOT_PREFIX__
BOT_NAME=__BOT_NAME__
BOT_DESCRIPTION=__BOT_DESCRIPTION__
BOT_ACTIVITY_TYPE=__ACTIVITY_TYPE__
BOT_ACTIVITY_TEXT=__ACTIVITY_TEXT__
BOT_STATUS=__PRESENCE_STATUS__
BOT_MOBILE=__MOBILE__
ENVEOF
print_success "Wrote .env.example"

if [ ! -f .env ]; then
    cp .env.example .env
    print_error "Fill in DISCORD_TOKEN in .env, then run this script again"
    exit 1
fi

print_status __STARTING_LINE__
exec python -m assistant_bot
"""


def render_deploy_script(form: SetupForm) -> str:
    """
    Render the deployment script with the form values written verbatim.

    Values that reach a shell command line are single-quoted with shlex.quote;
    the rest sit inside the quoted 'ENVEOF' heredoc, where the shell expands
    nothing. A value that spans lines could end that heredoc and is rejected.
    """
    fields = {
        "bot name": form.bot_name,
        "bot description": form.bot_description,
        "bot prefix": form.bot_prefix,
        "activity type": form.activity_type,
        "activity text": form.activity_text,
        "presence status": form.presence_status,
    }
    for label, value in fields.items():
        if "\n" in value or "\r" in value:
            raise SetupError(f"The {label} must be a single line")

    starting = f"Starting {form.bot_name} ({form.activity_type} {form.activity_text}, {form.presence_status})..."
    replacements = {
        "__BOT_LINE__": shlex.quote(f"Bot: {form.bot_name}"),
        "__DESCRIPTION_LINE__": shlex.quote(f"Description: {form.bot_description}"),
        "__STARTING_LINE__": shlex.quote(starting),
        "__BOT_NAME__": form.bot_name,
        "__BOT_DESCRIPTION__": form.bot_description,
        "__BOT_PREFIX__": form.bot_prefix,
        "__ACTIVITY_TYPE__": form.activity_type,
        "__ACTIVITY_TEXT__": form.activity_text,
        "__PRESENCE_STATUS__": form.presence_status,
        "__MOBILE__": "true" if form.mobile else "false",
    }
    # One pass, so marker-like text inside a value is left as typed
    pattern = re.compile("|".join(re.escape(marker) for marker in replacements))
    return pattern.sub(lambda m: replacements[m.group(0)], _SCRIPT_TEMPLATE)
