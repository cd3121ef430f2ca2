from typing import Dict, Optional

COOKIE_NAME = "sump_session"


def session_cookie(response, name: str = COOKIE_NAME) -> Optional[str]:
    """Raw Set-Cookie header for the session cookie, or None"""
    for header in response.headers.get_list("set-cookie"):
        if header.startswith(f"{name}="):
            return header
    return None


def session_cookie_value(response, name: str = COOKIE_NAME) -> Optional[str]:
    header = session_cookie(response, name)
    if header is None:
        return None
    return header.split(";", 1)[0].split("=", 1)[1].strip('"')


def cookie_header(value: str, name: str = COOKIE_NAME) -> Dict[str, str]:
    """Explicit Cookie header; takes precedence over the client's cookie jar"""
    return {"Cookie": f"{name}={value}"}
