"""
Top-level package for the AI assistant Discord bot.

This package hosts:
- config loading (.env + optional config.yaml) and validation
- Discord client, slash command catalog, dispatcher and presence handling
- the OpenAI-compatible completion client behind /ai
- the setup tool that renders .env files and deployment scripts
"""
