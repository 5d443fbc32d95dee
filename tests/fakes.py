"""Fake and wrapping DB-API connections for key discovery tests."""

from typing import Any, List, Optional, Sequence, Tuple


class TrackingCursor:
    """Cursor wrapper that reports close() to its connection."""

    def __init__(self, cursor, owner: "TrackingConnection"):
        self._cursor = cursor
        self._owner = owner

    def close(self) -> None:
        self._owner.open_cursors.remove(self)
        self._cursor.close()

    def __getattr__(self, name):
        return getattr(self._cursor, name)


class TrackingConnection:
    """Connection wrapper that records which cursors are still open."""

    def __init__(self, connection):
        self._connection = connection
        self.open_cursors: List[TrackingCursor] = []
        self.opened = 0

    def cursor(self) -> TrackingCursor:
        cursor = TrackingCursor(self._connection.cursor(), self)
        self.open_cursors.append(cursor)
        self.opened += 1
        return cursor


class ScriptedCursor:
    """Fake DB-API cursor answering queries from a script.

    The script maps a marker substring to the rows returned by any query
    containing it; the first matching marker wins. The zero-row probe is
    answered with ``probe_columns`` as its description.
    """

    def __init__(self, owner: "ScriptedConnection"):
        self._owner = owner
        self._rows: List[Sequence[Any]] = []
        self.description = None
        self.closed = False

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None):
        normalized = " ".join(sql.split())
        self._owner.executed.append((normalized, list(params or [])))
        if self._owner.error is not None:
            raise self._owner.error
        if normalized.startswith("SELECT * FROM"):
            self.description = [(name, None) for name in self._owner.probe_columns]
            self._rows = []
            return self
        self.description = None
        self._rows = []
        for marker, rows in self._owner.script:
            if marker in normalized:
                self._rows = list(rows)
                break
        return self

    def fetchall(self):
        return list(self._rows)

    def close(self) -> None:
        self.closed = True


class ScriptedConnection:
    """Fake connection handing out ScriptedCursors."""

    def __init__(
        self,
        script: List[Tuple[str, List[Sequence[Any]]]],
        probe_columns: List[str],
        error: Optional[BaseException] = None,
    ):
        self.script = script
        self.probe_columns = probe_columns
        self.error = error
        self.executed: List[Tuple[str, List[Any]]] = []
        self.cursors: List[ScriptedCursor] = []

    def cursor(self) -> ScriptedCursor:
        cursor = ScriptedCursor(self)
        self.cursors.append(cursor)
        return cursor
