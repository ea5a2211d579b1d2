"""SQLite connection handling and table initialization."""

import logging
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from orgcanvas.errors import PersistenceFailure

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).parent / "data" / "canvas.db"
CANVAS_DB_PATH = Path(os.getenv("CANVAS_DB_PATH", str(DEFAULT_DB_PATH)))


@contextmanager
def connect(write: bool = False) -> Iterator[sqlite3.Connection]:
    """Open a connection for one unit of work.

    The block runs in a single transaction: committed on success, rolled
    back on any exception. Writers take the database lock up front so the
    checks they make stay valid until commit. Driver errors surface as
    PersistenceFailure.
    """
    path = Path(CANVAS_DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        conn = sqlite3.connect(path, timeout=10.0)
    except sqlite3.Error as e:
        logger.error("cannot open %s: %s", path, e)
        raise PersistenceFailure(f"Database unavailable: {e}") from e
    conn.row_factory = sqlite3.Row
    try:
        if write:
            conn.execute("begin immediate")
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        logger.error("sqlite error on %s: %s", path, e)
        raise PersistenceFailure(f"Database error: {e}") from e
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_all() -> None:
    """initialize all sqlite tables."""
    from server.connection_db import init_db as init_connection_db
    from server.node_db import init_db as init_node_db

    init_node_db()
    init_connection_db()
