# notedrop_client/share.py
import os
from typing import Optional
from urllib.parse import parse_qs, quote, urlsplit

STATE_KEY = "state"
DEFAULT_BASE_URL = "http://localhost:5173/"


def base_url() -> str:
    return os.getenv("NOTEDROP_BASE_URL", DEFAULT_BASE_URL)


def share_url(token: str, base: Optional[str] = None) -> str:
    base = base or base_url()
    sep = "&" if "?" in base else "?"
    return f"{base}{sep}{STATE_KEY}={quote(token, safe='')}"


def token_from_argument(arg: Optional[str]) -> Optional[str]:
    """Accept either a share URL carrying ?state= or a bare token."""
    if not arg:
        return None
    arg = arg.strip()
    if "://" in arg or arg.startswith("?"):
        values = parse_qs(urlsplit(arg).query).get(STATE_KEY)
        # an unescaped '+' from base64 comes back as a space
        return values[0].replace(" ", "+") if values else None
    return arg
