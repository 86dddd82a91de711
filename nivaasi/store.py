"""
Serialized access to the domain store.

Every compound mutation (occupancy counters, connection code consumption,
rent status updates, cascading removals) runs inside ``transaction()`` so
that concurrent requests served on different threads cannot interleave
their read-modify-write sequences.
"""
import threading
from contextlib import contextmanager

from nivaasi.config import db

_lock = threading.RLock()
_depth = 0


@contextmanager
def transaction():
    """
    Hold the store lock for one unit of work.
    The outermost block commits on success and rolls back on any error;
    nested blocks join the enclosing one.
    """
    global _depth
    with _lock:
        _depth += 1
        try:
            yield db.session
            if _depth == 1:
                db.session.commit()
        except Exception:
            if _depth == 1:
                db.session.rollback()
            raise
        finally:
            _depth -= 1


@contextmanager
def snapshot():
    """Hold the store lock while reading several collections."""
    with _lock:
        yield db.session
