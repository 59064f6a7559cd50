"""
UK Location Data Mashup — Client State
=======================================
The state driving the dashboard, the messages that change it, and the
dispatch loop that applies them one at a time.

``update`` is a pure function of (state, message). Anything with a side
effect comes back from it as a command (currently only ``FetchReport``),
which ``Program`` executes and whose outcome it feeds back in as a
``ReportReceived`` or ``ReportFailed`` message.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import Executor
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from mashup.models import Report
from mashup.validation import is_valid_postcode

logger = logging.getLogger(__name__)


class ServerState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True)
class ClientState:
    """
    Everything the view needs.

    ``validation_error`` is None only for a well-formed postcode; an empty
    string means "invalid, but nothing to say yet" and still blocks
    submission. ``error_message`` is set while ``server_state`` is ERROR.
    """
    postcode: str = ""
    validation_error: Optional[str] = ""
    server_state: ServerState = ServerState.IDLE
    error_message: Optional[str] = None
    report: Optional[Report] = None

    @property
    def can_submit(self) -> bool:
        return self.validation_error is None


# ── Messages ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class PostcodeChanged:
    text: str


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class ReportReceived:
    report: Report


@dataclass(frozen=True)
class ReportFailed:
    error: Exception


@dataclass(frozen=True)
class Clear:
    pass


Msg = Union[PostcodeChanged, Submit, ReportReceived, ReportFailed, Clear]


# ── Commands ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class FetchReport:
    postcode: str


Command = FetchReport


def init() -> ClientState:
    """Starting state: nothing typed, so submission is disabled."""
    return ClientState()


def validation_message(text: str) -> Optional[str]:
    """None for a valid postcode, "" for no input, otherwise a message."""
    if is_valid_postcode(text):
        return None
    if not text.strip():
        return ""
    return f"'{text}' is not a valid UK postcode"


def update(state: ClientState, msg: Msg) -> Tuple[ClientState, Optional[Command]]:
    """Return the next state and the command to run, if any."""
    if isinstance(msg, Submit):
        if not state.can_submit:
            return state, None
        # A second Submit while LOADING is allowed through and starts
        # another fetch; whichever reply arrives last wins.
        return (
            replace(state, server_state=ServerState.LOADING, error_message=None),
            FetchReport(state.postcode),
        )

    if isinstance(msg, ReportReceived):
        return replace(
            state,
            validation_error=None,
            report=msg.report,
            server_state=ServerState.IDLE,
            error_message=None,
        ), None

    if isinstance(msg, PostcodeChanged):
        return replace(
            state,
            postcode=msg.text,
            validation_error=validation_message(msg.text),
        ), None

    if isinstance(msg, ReportFailed):
        return replace(
            state,
            server_state=ServerState.ERROR,
            error_message=str(msg.error),
        ), None

    if isinstance(msg, Clear):
        return replace(
            state,
            postcode="",
            validation_error="",
            report=None,
            server_state=ServerState.IDLE,
            error_message=None,
        ), None

    raise TypeError(f"Unknown message: {msg!r}")


class Program:
    """
    Single message-dispatch loop around ``update``.

    Messages are queued and applied strictly one at a time. Commands run
    inline when no executor is given (the dashboard's case: the script
    blocks until the report is back) or on *executor* otherwise, with the
    outcome dispatched back into the loop from the worker thread.
    """

    def __init__(
        self,
        fetch_report: Callable[[str], Report],
        state: Optional[ClientState] = None,
        executor: Optional[Executor] = None,
    ):
        self._fetch_report = fetch_report
        self._state = state or init()
        self._executor = executor
        self._queue: deque = deque()
        self._lock = threading.Lock()
        self._processing = False
        self._listeners: List[Callable[[ClientState], None]] = []

    @property
    def state(self) -> ClientState:
        return self._state

    def subscribe(self, listener: Callable[[ClientState], None]) -> None:
        """Call *listener* with every new state."""
        self._listeners.append(listener)

    def dispatch(self, msg: Msg) -> None:
        with self._lock:
            self._queue.append(msg)
            if self._processing:
                # Already draining on another frame or thread.
                return
            self._processing = True

        while True:
            with self._lock:
                if not self._queue:
                    self._processing = False
                    return
                msg = self._queue.popleft()
            try:
                self._step(msg)
            except BaseException:
                with self._lock:
                    self._queue.clear()
                    self._processing = False
                raise

    def _step(self, msg: Msg) -> None:
        # Only the thread holding the _processing flag gets here.
        self._state, command = update(self._state, msg)
        logger.debug("%s → %s", type(msg).__name__, self._state.server_state.value)
        for listener in self._listeners:
            listener(self._state)
        if command is not None:
            self._run(command)

    def _run(self, command: Command) -> None:
        if self._executor is None:
            self.dispatch(self._execute(command))
        else:
            self._executor.submit(lambda: self.dispatch(self._execute(command)))

    def _execute(self, command: Command) -> Msg:
        try:
            return ReportReceived(self._fetch_report(command.postcode))
        except Exception as exc:
            logger.warning("Report request for %s failed: %s", command.postcode, exc)
            return ReportFailed(exc)
