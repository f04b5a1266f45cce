"""
Generate deployment artifacts for the bot.

Usage:
    python -m assistant_bot.setup check-token <token>
    python -m assistant_bot.setup check-key <api_key>
    python -m assistant_bot.setup env --discord-token ... [--output .env]
    python -m assistant_bot.setup script --bot-name ... [--output deploy.sh]
"""

import argparse
import os
import sys

from rich import print

from assistant_bot.setup.artifacts import (
    SetupError,
    SetupForm,
    check_ai_key_format,
    check_discord_token_format,
    render_deploy_script,
    render_env_file,
)


def _add_form_arguments(parser: argparse.ArgumentParser) -> None:
    defaults = SetupForm()
    parser.add_argument("--bot-name", default=defaults.bot_name)
    parser.add_argument("--bot-description", default=defaults.bot_description)
    parser.add_argument("--bot-prefix", default=defaults.bot_prefix)
    parser.add_argument("--activity-type", default=defaults.activity_type,
                        choices=["playing", "streaming", "listening", "watching", "competing"])
    parser.add_argument("--activity-text", default=defaults.activity_text)
    parser.add_argument("--presence-status", default=defaults.presence_status,
                        choices=["online", "idle", "dnd", "invisible"])
    parser.add_argument("--mobile", action="store_true")
    parser.add_argument("--discord-token", default=os.environ.get("DISCORD_TOKEN", ""))
    parser.add_argument("--ai-api-key", default=os.environ.get("AI_API_KEY", ""))
    parser.add_argument("-o", "--output", help="write to this file instead of stdout")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m assistant_bot.setup", description=__doc__.splitlines()[1])
    sub = parser.add_subparsers(dest="command", required=True)

    token = sub.add_parser("check-token", help="check Discord token format")
    token.add_argument("value")
    key = sub.add_parser("check-key", help="check GROQ API key format")
    key.add_argument("value")

    _add_form_arguments(sub.add_parser("env", help="generate a .env file"))
    script = sub.add_parser(
        "script",
        help="generate a deployment shell script",
        description="Form values are written verbatim. Those echoed by the script are "
                    "single-quoted, so quotes and $(...) in a bot name print as typed.",
    )
    _add_form_arguments(script)
    return parser


def form_from_args(args: argparse.Namespace) -> SetupForm:
    return SetupForm(
        bot_name=args.bot_name,
        bot_description=args.bot_description,
        bot_prefix=args.bot_prefix,
        activity_type=args.activity_type,
        activity_text=args.activity_text,
        presence_status=args.presence_status,
        mobile=args.mobile,
        discord_token=args.discord_token,
        ai_api_key=args.ai_api_key,
    )


def _emit(content: str, output: str | None, mode: int | None = None) -> None:
    if not output:
        sys.stdout.write(content)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(content)
    if mode is not None:
        os.chmod(output, mode)
    print(f"[green]✅ Wrote {output}[/green]", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command in ("check-token", "check-key"):
        check = check_discord_token_format if args.command == "check-token" else check_ai_key_format
        ok, message = check(args.value)
        print(f"[green]✅ {message}[/green]" if ok else f"[red]❌ {message}[/red]")
        return 0 if ok else 1

    form = form_from_args(args)
    try:
        if args.command == "env":
            _emit(render_env_file(form), args.output)
        else:
            _emit(render_deploy_script(form), args.output, mode=0o755)
    except SetupError as e:
        print(f"[red]❌ {e}[/red]", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
