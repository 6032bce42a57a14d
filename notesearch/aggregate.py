"""Aggregation loop: page through one source and accumulate normalized records."""

from __future__ import annotations

import logging
from dataclasses import replace

import httpx

from notesearch.config import (
    get_http_config,
    get_locale_tag,
    get_pagination_policy,
    get_timezone,
)
from notesearch.dates import format_date
from notesearch.errors import FetchError, SessionCancelled, SourceHTTPError
from notesearch.labels import get_labels
from notesearch.models import ArticleRecord, FetchSession, PageKind, SessionState
from notesearch.present import BasePresenter
from notesearch.sources import get_source
from notesearch.sources.base import BaseSource

logger = logging.getLogger(__name__)


class Aggregator:
    """Run fetch sessions against one source at a time.

    Each session gets a generation number. Starting another session or
    calling invalidate() makes older sessions stale; their pending page
    responses are dropped and they end CANCELLED.
    """

    def __init__(
        self,
        config: dict,
        presenter: BasePresenter | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self.presenter = presenter
        self.client = client
        self.policy = get_pagination_policy(config)
        self.labels = get_labels(config)
        self.locale_tag = get_locale_tag(config)
        self.timezone = get_timezone(config)
        self.session: FetchSession | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> int:
        """Mark every running session stale."""
        self._generation += 1
        return self._generation

    def is_current(self, session: FetchSession) -> bool:
        return session.generation == self._generation

    def format_record(self, record: ArticleRecord) -> ArticleRecord:
        return replace(
            record,
            formatted_date=format_date(
                record.date,
                self.locale_tag,
                self.labels["unknown_date"],
                timezone=self.timezone,
            ),
        )

    async def fetch_all(
        self, source_key: str, user_id: str, present_results: bool = True,
    ) -> list[ArticleRecord]:
        """Fetch every page of user_id's articles from source_key.

        Progress and errors always reach the presenter. With
        present_results=False the finished list is left for the caller
        to render.
        """
        user_id = (user_id or "").strip()
        if not user_id:
            raise ValueError("user_id must not be empty")

        session = FetchSession(
            generation=self.invalidate(),
            source_key=source_key,
            user_id=user_id,
        )
        self.session = session

        if self.client is not None:
            source = get_source(source_key, self.config, client=self.client)
            return await self._run(session, source, present_results)

        http = get_http_config(self.config)
        async with httpx.AsyncClient(
            timeout=http["timeout"],
            headers={"User-Agent": http["user_agent"]},
            follow_redirects=True,
        ) as client:
            source = get_source(source_key, self.config, client=client)
            return await self._run(session, source, present_results)

    async def _run(
        self, session: FetchSession, source: BaseSource, present_results: bool,
    ) -> list[ArticleRecord]:
        session.state = SessionState.FETCHING
        logger.info(
            "Session %d: fetching %s articles for '%s'",
            session.generation, source.name, session.user_id,
        )

        page = 1
        try:
            while True:
                result = await source.fetch_page(session.user_id, page)
                self._check_current(session, page)
                session.pages_fetched += 1

                if result.kind is PageKind.ERROR:
                    if not self.policy.stop_on_http_error:
                        raise SourceHTTPError(result.cause, result.status_code)
                    logger.warning(
                        "%s on page %d; treating as end of results",
                        result.cause, page,
                    )
                    session.end_reason = "http_error"
                    break

                session.records.extend(
                    self.format_record(record) for record in result.records
                )
                if result.records:
                    self._notify_progress(source, len(session.records))

                reason = self.policy.stop_reason(
                    len(result.records), session.pages_fetched,
                )
                if reason:
                    session.end_reason = reason
                    if reason == "max_pages":
                        logger.warning(
                            "Session %d hit the %d page limit",
                            session.generation, self.policy.max_pages,
                        )
                    break
                page += 1
        except SessionCancelled:
            raise
        except Exception as exc:
            self._fail(session, exc)

        session.state = SessionState.COMPLETE
        logger.info(
            "Session %d: %d %s articles over %d pages (%s)",
            session.generation, len(session.records), source.name,
            session.pages_fetched, session.end_reason,
        )
        if present_results:
            self._present(session)
        return list(session.records)

    def _check_current(self, session: FetchSession, page: int) -> None:
        if self.is_current(session):
            return
        session.state = SessionState.CANCELLED
        logger.info(
            "Session %d superseded; discarding page %d", session.generation, page,
        )
        raise SessionCancelled(f"session {session.generation} superseded")

    def _fail(self, session: FetchSession, exc: Exception) -> None:
        if not self.is_current(session):
            session.state = SessionState.CANCELLED
            raise SessionCancelled(
                f"session {session.generation} superseded",
            ) from exc

        session.state = SessionState.FAILED
        session.records = []
        session.error = str(exc) or type(exc).__name__
        logger.exception(
            "Session %d for %s/%s failed",
            session.generation, session.source_key, session.user_id,
        )
        if self.presenter is not None:
            self.presenter.show_error(session.error)
        if isinstance(exc, FetchError):
            raise exc
        raise FetchError(session.error) from exc

    def _notify_progress(self, source: BaseSource, count: int) -> None:
        if self.presenter is not None:
            self.presenter.progress(source.display_name, count)

    def _present(self, session: FetchSession) -> None:
        if self.presenter is None:
            return
        if session.records:
            self.presenter.render(session.records)
            self.presenter.update_count(len(session.records))
        else:
            self.presenter.show_empty(self.labels["no_results"])
            self.presenter.update_count(0)


async def fetch_all_articles(
    source_key: str,
    user_id: str,
    config: dict | None = None,
    presenter: BasePresenter | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[ArticleRecord]:
    """Fetch and normalize all of a user's articles from one source."""
    aggregator = Aggregator(config or {}, presenter=presenter, client=client)
    return await aggregator.fetch_all(source_key, user_id)
