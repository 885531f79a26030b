import threading

import sqlalchemy.orm as so

_GUARD_KEY = "row_sequencer.session_guard"


def session_guard(session: so.Session) -> threading.RLock:
    """
    Re-entrant lock shared by every store built on ``session``.

    A Session must not be used by two threads at once; stores that share
    one (rows and durable counter) serialise their calls through this lock.
    """
    return session.info.setdefault(_GUARD_KEY, threading.RLock())
