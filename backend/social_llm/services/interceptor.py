"""EventInterceptor: turns recorded interactions into generated notifications.

Subscribed to the play log, ``on_event`` runs synchronously inside the
host's own add call. It only filters, deduplicates and builds the prompt;
the network call and the notification happen in a background task so the
host never waits on I/O. Nothing raised here reaches the host: failures
are logged and the only visible effect is a missing notification.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Callable, Coroutine, Union

from social_llm.config import ConfigStore, GenerationConfig
from social_llm.generation.client import GenerationClient, GenerationError
from social_llm.generation.prompts import build_prompt
from social_llm.generation.sanitizer import sanitize, strip_color_tags
from social_llm.models.interaction import (
    Agent,
    InteractionEvent,
    LogEntry,
    Notification,
    Severity,
)
from social_llm.services.background import BackgroundLoop
from social_llm.services.dedup import ProcessedSet
from social_llm.services.notifications import NotificationSink
from social_llm.services.play_log import PlayLog

logger = logging.getLogger(__name__)

PendingWork = Union[asyncio.Task, concurrent.futures.Future]


class EventInterceptor:
    def __init__(
        self,
        config_store: ConfigStore,
        client: GenerationClient,
        sink: NotificationSink,
        processed: ProcessedSet | None = None,
        background: BackgroundLoop | None = None,
    ) -> None:
        self._config_store = config_store
        self._client = client
        self._sink = sink
        self._processed = processed or ProcessedSet()
        self._background = background
        self._pending: set[PendingWork] = set()
        self._pending_lock = threading.Lock()

    @property
    def processed(self) -> ProcessedSet:
        return self._processed

    def attach(self, play_log: PlayLog) -> Callable[[], None]:
        return play_log.subscribe(self.on_event)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def on_event(self, entry: LogEntry) -> PendingWork | None:
        """Handle one play log entry. Returns the scheduled work, if any."""
        try:
            config = self._config_store.snapshot()
            if not config.enabled:
                return None

            if entry.id in self._processed:
                return None

            if not isinstance(entry, InteractionEvent):
                return None

            initiator, recipient = entry.initiator, entry.recipient
            if not self._resolvable(initiator) or not self._resolvable(recipient):
                logger.debug("Skipping event %s: missing participant", entry.id)
                return None

            # Claim the event before doing anything else; a concurrent or
            # recursive delivery of the same event stops here.
            if not self._processed.add_if_absent(entry.id):
                return None

            original_text = strip_color_tags(entry.render(pov=initiator))
            prompt = build_prompt(initiator, recipient, original_text)

            return self._schedule(
                self._generate_and_notify(entry, initiator, prompt, config)
            )
        except Exception:
            logger.exception("Error processing play log entry %s", getattr(entry, "id", "?"))
            return None

    @staticmethod
    def _resolvable(agent: Agent | None) -> bool:
        return agent is not None and bool(getattr(agent, "name", ""))

    # ------------------------------------------------------------------
    # Background work
    # ------------------------------------------------------------------

    def _schedule(self, coro: Coroutine[Any, Any, Any]) -> PendingWork:
        if self._background is not None:
            work: PendingWork = self._background.submit(coro)
        else:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                coro.close()
                raise RuntimeError(
                    "No running event loop and no background loop for generation"
                ) from None
            work = loop.create_task(coro)

        with self._pending_lock:
            self._pending.add(work)
        work.add_done_callback(self._forget)
        return work

    def _forget(self, work: PendingWork) -> None:
        with self._pending_lock:
            self._pending.discard(work)

    async def _generate_and_notify(
        self,
        entry: InteractionEvent,
        initiator: Agent,
        prompt: str,
        config: GenerationConfig,
    ) -> Notification | None:
        try:
            generated = await self._client.generate(config, prompt)
        except GenerationError as exc:
            logger.error("Generation failed for event %s: %s", entry.id, exc)
            return None
        except Exception:
            logger.exception("Unexpected error generating text for event %s", entry.id)
            return None

        message = sanitize(generated).strip()
        if not message:
            logger.warning("Generated text for event %s was empty after cleanup", entry.id)
            return None

        return self._emit(entry, initiator, message)

    def _emit(
        self, entry: InteractionEvent, initiator: Agent, message: str
    ) -> Notification | None:
        try:
            notification = Notification(
                text=f"{initiator.name}: {message}",
                severity=Severity.NEUTRAL,
                historical=False,
                source_event_id=entry.id,
            )
            self._sink.post(notification)
        except Exception:
            logger.exception("Error while posting notification for event %s", entry.id)
            return None

        logger.info("Generated interaction message: %s", notification.text)
        return notification

    # ------------------------------------------------------------------
    # Draining (shutdown and tests)
    # ------------------------------------------------------------------

    @property
    def pending_count(self) -> int:
        with self._pending_lock:
            return len(self._pending)

    async def drain(self) -> None:
        """Wait until every scheduled generation task has finished."""
        while True:
            with self._pending_lock:
                pending = list(self._pending)
            if not pending:
                return
            await asyncio.gather(
                *(
                    asyncio.wrap_future(w) if isinstance(w, concurrent.futures.Future) else w
                    for w in pending
                ),
                return_exceptions=True,
            )
            # Let done-callbacks run before re-checking
            await asyncio.sleep(0)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until background-loop work is done. For synchronous hosts."""
        with self._pending_lock:
            pending = [w for w in self._pending if isinstance(w, concurrent.futures.Future)]
        _, not_done = concurrent.futures.wait(pending, timeout=timeout)
        return not not_done
