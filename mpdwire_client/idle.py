#!/usr/bin/env python3
"""
Idle Session - long-poll for subsystem changes without losing close events.

The daemon merges notifications from the same tick into one idle reply, and
every new idle call starts a fresh observation point, so changes landing
between one reply and the next call can go unseen. After the first
(blocking) idle returns, a session on a local transport re-issues idle with
a very short deadline until one times out, collecting whatever the daemon
had already queued.

This narrows the window, it does not close it. Over non-local links the
drain is skipped, since each short call risks a spurious timeout.
"""

from typing import List, Optional, Sequence, Union

from mpdwire_common.constants import DEFAULT_IDLE_DRAIN_TIMEOUT
from mpdwire_common.exceptions import MPDTimeoutError
from mpdwire_common.logging import get_bound_logger

from .parser import ParsedValue
from .runner import CommandRunner

logger = get_bound_logger("idle_session")


class IdleSession:
    """Wraps a CommandRunner's "idle" verb with the drain loop."""

    def __init__(self, runner: CommandRunner,
                 idle_timeout: Optional[float] = None,
                 drain_timeout: float = DEFAULT_IDLE_DRAIN_TIMEOUT,
                 drain: Optional[bool] = None):
        """
        Args:
            runner: Runner that owns the connection
            idle_timeout: Deadline for the first call; None blocks until a change
            drain_timeout: Deadline for each follow-up call
            drain: Force the drain loop on or off; None decides from the transport
        """
        self.runner = runner
        self.idle_timeout = idle_timeout
        self.drain_timeout = drain_timeout
        self.drain = drain

    def should_drain(self) -> bool:
        if self.drain is not None:
            return self.drain
        return self.runner.is_local

    def idle(self, subsystems: Sequence[str] = ()) -> Union[ParsedValue, List[ParsedValue]]:
        """
        Block until a subsystem changes.

        Returns:
            The parsed reply when only the first call produced one, otherwise
            every reply in the order received

        Raises:
            Whatever the first call raises; only drain-loop timeouts are absorbed
        """
        with self.runner.lock:
            results = [self.runner.run("idle", subsystems, timeout=self.idle_timeout)]
            logger.debug("idle.changed", changed=results[0])

            if self.should_drain():
                while True:
                    try:
                        results.append(
                            self.runner.run("idle", subsystems, timeout=self.drain_timeout)
                        )
                    except MPDTimeoutError:
                        break
                logger.debug("idle.drained", results=len(results))

        if len(results) == 1:
            return results[0]
        return results
