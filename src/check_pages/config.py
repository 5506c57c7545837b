"""
Run configuration and option validation.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from check_pages import __version__

DEFAULT_USER_AGENT = f"check-pages/{__version__}"
DEFAULT_TIMEOUT_S = 15.0

# Option names as they appear in options files, mapped to CheckConfig fields
OPTION_FIELDS: Dict[str, str] = {
    "pageUrls": "page_urls",
    "checkLinks": "check_links",
    "onlySameDomainLinks": "only_same_domain_links",
    "disallowRedirect": "disallow_redirect",
    "linksToIgnore": "links_to_ignore",
    "checkXhtml": "check_xhtml",
    "maxResponseTime": "max_response_time",
    "timeout": "timeout",
    "userAgent": "user_agent",
}


class ConfigurationError(ValueError):
    """Raised when the run configuration is missing or malformed."""


@dataclass(frozen=True, slots=True)
class CheckConfig:
    """Immutable settings for one run."""
    page_urls: Tuple[str, ...]
    check_links: bool = False
    only_same_domain_links: bool = False
    disallow_redirect: bool = False
    links_to_ignore: FrozenSet[str] = frozenset()
    check_xhtml: bool = False
    max_response_time: Optional[float] = None
    timeout: float = DEFAULT_TIMEOUT_S
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "CheckConfig":
        """
        Build a validated config from camelCase options.

        Flags are normalized by truthiness. Missing optional values take
        their defaults; malformed ones raise ConfigurationError.
        """
        unknown = sorted(set(options) - set(OPTION_FIELDS))
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

        page_urls = options.get("pageUrls")
        if page_urls is None:
            raise ConfigurationError("pageUrls option is not present; it should be an array of URLs")
        if not _is_list(page_urls) or not all(isinstance(u, str) and u for u in page_urls):
            raise ConfigurationError("pageUrls option is invalid; it should be an array of URLs")
        if not page_urls:
            raise ConfigurationError("pageUrls option is empty; it should contain at least one URL")

        links_to_ignore = options.get("linksToIgnore") or []
        if not _is_list(links_to_ignore) or not all(isinstance(u, str) for u in links_to_ignore):
            raise ConfigurationError("linksToIgnore option is invalid; it should be an array")

        max_response_time = options.get("maxResponseTime")
        if max_response_time is not None and not _is_positive_number(max_response_time):
            raise ConfigurationError("maxResponseTime option is invalid; it should be a positive number")

        timeout = options.get("timeout")
        if timeout is None:
            timeout = DEFAULT_TIMEOUT_S
        elif not _is_positive_number(timeout):
            raise ConfigurationError("timeout option is invalid; it should be a positive number of seconds")

        user_agent = options.get("userAgent") or DEFAULT_USER_AGENT
        if not isinstance(user_agent, str):
            raise ConfigurationError("userAgent option is invalid; it should be a string")

        return cls(
            page_urls=tuple(page_urls),
            check_links=bool(options.get("checkLinks")),
            only_same_domain_links=bool(options.get("onlySameDomainLinks")),
            disallow_redirect=bool(options.get("disallowRedirect")),
            links_to_ignore=frozenset(links_to_ignore),
            check_xhtml=bool(options.get("checkXhtml")),
            max_response_time=max_response_time,
            timeout=float(timeout),
            user_agent=user_agent,
        )


def load_options(path: str | Path) -> Dict[str, Any]:
    """Read options from a JSON file, unwrapping an "options" object if present."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("options"), dict):
        data = data["options"]
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} should contain a JSON object")
    return data


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_positive_number(value: Any) -> bool:
    # bool is an int subclass; True is not a response time
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
