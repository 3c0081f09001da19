"""
Narration services: the interface the reading cursor talks to, and an
in-process implementation that delivers events from a queue.

A service accepts one utterance at a time and reports ``started``,
``ended``, ``paused`` and ``resumed`` events to its listeners.  Listeners
may call back into the service (the cursor speaks the next sentence from
its ``ended`` handler), so events are never delivered from inside
:meth:`speak`.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, List, Optional

from .models import NarrationEvent, NarrationEventKind, UtteranceRequest, Voice

logger = logging.getLogger(__name__)

NarrationListener = Callable[[NarrationEvent], None]


class NarrationService(ABC):
    """
    Common interface for all narration backends.

    Subclasses must implement :meth:`speak`, :meth:`pause`,
    :meth:`resume`, :meth:`cancel` and expose ``speaking`` and
    ``paused``.
    """

    def __init__(self):
        self._listeners: List[NarrationListener] = []

    def add_listener(self, listener: NarrationListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: NarrationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: NarrationEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    @abstractmethod
    def speak(self, request: UtteranceRequest) -> None:
        """Start narrating *request*, replacing any current utterance."""

    @abstractmethod
    def pause(self) -> None:
        """Pause the current utterance, if any."""

    @abstractmethod
    def resume(self) -> None:
        """Resume a paused utterance."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop the current utterance without reporting ``ended``."""

    @property
    @abstractmethod
    def speaking(self) -> bool:
        """True while an utterance is active (including while paused)."""

    @property
    @abstractmethod
    def paused(self) -> bool:
        """True while the active utterance is paused."""

    def voices(self) -> List[Voice]:
        """Voices this service can narrate with."""
        return []


class QueuedNarrationService(NarrationService):
    """
    In-process narration service.

    Events are queued and only delivered by :meth:`pump`, one at a time,
    so a listener that speaks again from its ``ended`` handler never
    recurses.  ``finish()`` marks the current utterance as done.

    Subclasses produce output by overriding :meth:`_render`, which
    :meth:`run_until_idle` calls once per utterance.

    Usage::

        narrator = QueuedNarrationService()
        cursor = ReadingCursor(narrator)
        cursor.load(pages)
        cursor.play()
        narrator.run_until_idle()
    """

    def __init__(self, voices: Optional[List[Voice]] = None):
        super().__init__()
        self._voices: List[Voice] = list(voices or [])
        self._current: Optional[UtteranceRequest] = None
        self._paused = False
        self._events: Deque[NarrationEvent] = deque()
        self._pumping = False
        self.spoken: List[UtteranceRequest] = []

    # ------------------------------------------------------------------
    # NarrationService
    # ------------------------------------------------------------------

    def speak(self, request: UtteranceRequest) -> None:
        if not request.text or not request.text.strip():
            logger.debug("Ignoring empty utterance #%d", request.utterance_id)
            return
        self._current = request
        self._paused = False
        self.spoken.append(request)
        self._events.append(NarrationEvent(NarrationEventKind.STARTED, request.utterance_id))

    def pause(self) -> None:
        if self._current is None or self._paused:
            return
        self._paused = True
        self._events.append(
            NarrationEvent(NarrationEventKind.PAUSED, self._current.utterance_id)
        )

    def resume(self) -> None:
        if self._current is None or not self._paused:
            return
        self._paused = False
        self._events.append(
            NarrationEvent(NarrationEventKind.RESUMED, self._current.utterance_id)
        )

    def cancel(self) -> None:
        if self._current is not None:
            logger.debug("Cancelled utterance #%d", self._current.utterance_id)
        self._current = None
        self._paused = False

    @property
    def speaking(self) -> bool:
        return self._current is not None

    @property
    def paused(self) -> bool:
        return self._paused

    def voices(self) -> List[Voice]:
        return list(self._voices)

    # ------------------------------------------------------------------
    # Event pump
    # ------------------------------------------------------------------

    @property
    def current(self) -> Optional[UtteranceRequest]:
        return self._current

    def finish(self) -> None:
        """Mark the current utterance as completed and queue ``ended``."""
        if self._current is None:
            return
        self._events.append(
            NarrationEvent(NarrationEventKind.ENDED, self._current.utterance_id)
        )
        self._current = None
        self._paused = False

    def pump(self) -> int:
        """
        Deliver queued events to the listeners in order.

        Events queued by listeners during delivery are delivered in the
        same call.  Re-entrant calls return immediately.

        Returns:
            Number of events delivered.
        """
        if self._pumping:
            return 0
        self._pumping = True
        delivered = 0
        try:
            while self._events:
                self._emit(self._events.popleft())
                delivered += 1
        finally:
            self._pumping = False
        return delivered

    def run_until_idle(self, limit: Optional[int] = None) -> int:
        """
        Render and finish utterances until nothing is left to narrate.

        Stops when no utterance is active after pumping, when the active
        utterance is paused, or after *limit* utterances.

        Returns:
            Number of utterances rendered.
        """
        rendered = 0
        while True:
            self.pump()
            if self._current is None or self._paused:
                break
            if limit is not None and rendered >= limit:
                break
            self._render(self._current)
            rendered += 1
            self.finish()
        return rendered

    def _render(self, request: UtteranceRequest) -> None:
        """Produce output for *request*.  The base class produces none."""

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(speaking={self.speaking}, "
            f"paused={self._paused}, queued={len(self._events)})"
        )
