"""Discord bot integration for senkyoku.

The bot runs in-process with FastAPI, sharing the same event loop, and
serves the /senkyoku slash command.

Optional: if DISCORD_BOT_TOKEN is not set, the app runs without Discord.
"""
