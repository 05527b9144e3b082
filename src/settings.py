"""Static configuration for the comment-command bot.

All user-editable settings (bot identity, services, logging) live in a
single JSON file for quick edits without touching Python. Secrets come from
the environment (or a .env file).
"""

import json
import os

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# config.json sits next to the project root unless BOT_CONFIG_PATH points elsewhere.
CONFIG_PATH = os.getenv("BOT_CONFIG_PATH", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# The bot name is embedded in every command grammar ("@<bot_name> ...").
BOT_NAME = os.getenv("BOT_NAME") or _CONFIG.get("bot_name", "")
COMMENT_CATEGORY = _CONFIG.get("comment_category", "issue_comment.created")

# External services, one entry per "@<bot_name> <command>".
SERVICES_CONFIG = _CONFIG.get("services", [])

# Invoker behaviour:
# - success_statuses: "2xx" (any 2xx answer) or "200" (exactly 200)
# - templates_base_url: where relative template_file names are resolved,
#   may contain context fields such as {repo}
_invoker = _CONFIG.get("invoker", {})
SUCCESS_STATUSES = _invoker.get("success_statuses", "2xx")
TEMPLATES_BASE_URL = _invoker.get("templates_base_url")
HTTP_TIMEOUT = float(_invoker.get("timeout_seconds", 30))

# GitHub access for replies and issue body edits.
_github = _CONFIG.get("github", {})
GITHUB_API_URL = _github.get("api_url", "https://api.github.com")
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
