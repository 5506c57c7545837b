"""
Page and link checking pipeline.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from check_pages.config import CheckConfig
from check_pages.http import GET, HEAD, Fetcher
from check_pages.links import extract_links, is_link_allowed, parse_html
from check_pages.reporting import Reporter
from check_pages.work_queue import Done, WorkQueue
from check_pages.xhtml import well_formedness_errors

Clock = Callable[[], float]


@dataclass
class CheckContext:
    """State for one run: settings, collaborators, the queue and the issue count."""
    config: CheckConfig
    fetcher: Fetcher
    reporter: Reporter
    clock: Clock = time.perf_counter
    queue: WorkQueue = field(default_factory=WorkQueue)
    issue_count: int = 0

    def issue(self, message: str) -> None:
        """Log a failed check and count it."""
        self.reporter.error(message)
        self.issue_count += 1

    def elapsed_ms(self, start: float) -> int:
        return round((self.clock() - start) * 1000)


@dataclass(slots=True)
class CheckResult:
    """Final outcome of a run."""
    issue_count: int

    @property
    def ok(self) -> bool:
        return self.issue_count == 0

    @property
    def summary(self) -> str:
        return summarize(self.issue_count)


def summarize(issue_count: int) -> str:
    """Describe the run outcome in one line."""
    if not issue_count:
        return "All checks passed"
    plural = "s" if issue_count > 1 else ""
    return f"{issue_count} issue{plural}, see above"


@dataclass
class PageTask:
    """Fetches a root page and runs the configured checks on it."""
    context: CheckContext
    url: str

    def __call__(self, done: Done) -> None:
        ctx = self.context
        config = ctx.config
        start = ctx.clock()
        result = ctx.fetcher.fetch(GET, self.url, allow_redirects=True)
        elapsed = ctx.elapsed_ms(start)

        if result.error is not None:
            ctx.issue(f"Page error: {result.error} ({elapsed}ms)")
        elif not result.ok:
            ctx.issue(f"Bad page ({result.status}): {self.url} ({elapsed}ms)")
        else:
            ctx.reporter.ok(f"Page: {self.url} ({elapsed}ms)")
            body = result.body or ""

            if config.check_links:
                ctx.queue.enqueue_front_all(self._link_tasks(body))

            if config.check_xhtml:
                for message in well_formedness_errors(body):
                    ctx.issue(message)

            if config.max_response_time and config.max_response_time < elapsed:
                ctx.issue(f"Page response took more than {config.max_response_time}ms to complete")

        done()

    def _link_tasks(self, body: str) -> List["LinkTask"]:
        config = self.context.config
        return [
            LinkTask(self.context, link)
            for link in extract_links(parse_html(body), self.url)
            if is_link_allowed(link, self.url, config.only_same_domain_links, config.links_to_ignore)
        ]


@dataclass
class LinkTask:
    """Checks that a link resolves, retrying a failed HEAD once as GET."""
    context: CheckContext
    url: str
    retry_with_get: bool = False

    def __call__(self, done: Done) -> None:
        ctx = self.context
        start = ctx.clock()
        result = ctx.fetcher.fetch(
            GET if self.retry_with_get else HEAD,
            self.url,
            allow_redirects=not ctx.config.disallow_redirect,
            read_body=False,
        )
        elapsed = ctx.elapsed_ms(start)

        if result.error is None and not result.ok and not self.retry_with_get:
            # Some servers reject HEAD but serve GET; the retry replaces this check
            LinkTask(ctx, self.url, retry_with_get=True)(done)
            return

        if result.error is not None:
            ctx.issue(f"Link error: {result.error} ({elapsed}ms)")
        elif not result.ok:
            ctx.issue(f"Bad link ({result.status}): {self.url} ({elapsed}ms)")
        else:
            ctx.reporter.ok(f"Link: {self.url} ({elapsed}ms)")
        done()


def run_checks(
    config: CheckConfig,
    done: Callable[[int], None],
    reporter: Optional[Reporter] = None,
    fetcher: Optional[Fetcher] = None,
    clock: Clock = time.perf_counter,
) -> CheckContext:
    """
    Check every configured page and call done(issue_count) once at the end.

    Pages are checked in order. Links found on a page are checked before
    the next page is fetched.

    Returns:
        The run context; its issue_count is final once done has been called.
    """
    ctx = CheckContext(
        config=config,
        fetcher=fetcher or Fetcher(user_agent=config.user_agent, timeout_s=config.timeout),
        reporter=reporter or Reporter(),
        clock=clock,
    )

    for page in config.page_urls:
        ctx.queue.enqueue_back(PageTask(ctx, page))

    def finish(task_done: Done) -> None:
        done(ctx.issue_count)
        task_done()

    ctx.queue.enqueue_back(finish)
    ctx.queue.run_to_completion()
    return ctx


def check_pages(
    config: CheckConfig,
    reporter: Optional[Reporter] = None,
    fetcher: Optional[Fetcher] = None,
    clock: Clock = time.perf_counter,
) -> CheckResult:
    """Run all checks and return the outcome."""
    outcome: List[int] = []
    owned = fetcher is None
    fetcher = fetcher or Fetcher(user_agent=config.user_agent, timeout_s=config.timeout)
    try:
        run_checks(config, outcome.append, reporter=reporter, fetcher=fetcher, clock=clock)
    finally:
        if owned:
            fetcher.close()
    return CheckResult(issue_count=outcome[0])
