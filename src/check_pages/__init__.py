"""
Checks web pages for broken links, XHTML well-formedness and slow responses.
Pages are checked one at a time; links found on a page are checked before the next page.
"""
__version__ = "1.0.0"

from check_pages.config import CheckConfig, ConfigurationError
from check_pages.core import CheckContext, CheckResult, check_pages, run_checks

__all__ = [
    "CheckConfig",
    "CheckContext",
    "CheckResult",
    "ConfigurationError",
    "check_pages",
    "run_checks",
]
