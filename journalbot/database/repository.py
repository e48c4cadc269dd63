"""Repository for journals, papers, reviewers and indexing databases."""

import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

from journalbot.exceptions import ConflictError, InvalidInputError, NotFoundError
from journalbot.models.journal import DatabaseApplication, DatabaseConfig, Journal
from journalbot.models.paper import Paper
from journalbot.models.reviewer import Reviewer

# Columns that update_* methods accept, keyed by table
_UPDATABLE = {
    "journals": {"name", "code", "issn", "status", "wordpress_url"},
    "reviewers": {"first_name", "last_name", "email", "institution", "expertise", "rating"},
    "database_configs": {"name", "enabled", "check_frequency"},
}

_SCHEMA = """
CREATE TABLE IF NOT EXISTS journals (
    id TEXT PRIMARY KEY,
    tenant_id TEXT NOT NULL,
    name TEXT NOT NULL,
    code TEXT NOT NULL,
    issn TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'ACTIVE',
    wordpress_url TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS papers (
    id TEXT PRIMARY KEY,
    tenant_id TEXT NOT NULL,
    journal_id TEXT NOT NULL REFERENCES journals(id) ON DELETE CASCADE,
    title TEXT NOT NULL,
    doi TEXT NOT NULL,
    authors TEXT NOT NULL DEFAULT '',
    pub_date TEXT,
    indexing_status TEXT NOT NULL DEFAULT 'PENDING',
    scholar_url TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE(doi)
);
CREATE TABLE IF NOT EXISTS reviewers (
    id TEXT PRIMARY KEY,
    tenant_id TEXT NOT NULL,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    email TEXT NOT NULL,
    institution TEXT,
    expertise TEXT NOT NULL DEFAULT '',
    rating REAL NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    UNIQUE(email)
);
CREATE TABLE IF NOT EXISTS database_configs (
    id TEXT PRIMARY KEY,
    tenant_id TEXT NOT NULL,
    name TEXT NOT NULL,
    enabled INTEGER NOT NULL DEFAULT 1,
    check_frequency TEXT NOT NULL DEFAULT 'WEEKLY'
);
CREATE TABLE IF NOT EXISTS database_applications (
    id TEXT PRIMARY KEY,
    tenant_id TEXT NOT NULL,
    journal_id TEXT NOT NULL REFERENCES journals(id) ON DELETE CASCADE,
    database_config_id TEXT NOT NULL REFERENCES database_configs(id) ON DELETE CASCADE,
    status TEXT NOT NULL DEFAULT 'PENDING',
    notes TEXT,
    submitted_at TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE(journal_id, database_config_id)
);
CREATE TABLE IF NOT EXISTS audit_logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    tenant_id TEXT NOT NULL,
    user_id TEXT,
    action TEXT NOT NULL,
    details TEXT,
    timestamp TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_papers_journal ON papers(journal_id);
CREATE INDEX IF NOT EXISTS idx_papers_tenant ON papers(tenant_id);
CREATE INDEX IF NOT EXISTS idx_papers_status ON papers(indexing_status);
CREATE INDEX IF NOT EXISTS idx_reviewers_tenant ON reviewers(tenant_id);
CREATE INDEX IF NOT EXISTS idx_applications_config ON database_applications(database_config_id);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


class IndexingRepository:
    """Repository for indexing-admin CRUD operations using SQLite."""

    def __init__(self, db_path: Path):
        """Initialize repository with database path.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self._init_db()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections.

        Unique-constraint violations are re-raised as :class:`ConflictError`,
        other integrity errors as :class:`InvalidInputError`.
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        except sqlite3.IntegrityError as e:
            conn.rollback()
            message = str(e)
            if "UNIQUE" in message:
                field = message.rsplit(".", 1)[-1] if "." in message else None
                raise ConflictError("Resource already exists", field=field) from e
            raise InvalidInputError("Invalid reference to related resource") from e
        finally:
            conn.close()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._connection() as conn:
            conn.executescript(_SCHEMA)
            conn.commit()

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with self._connection() as conn:
            return conn.execute("SELECT 1").fetchone()[0] == 1

    def _update_fields(self, table: str, row_id: str, fields: dict[str, Any]) -> bool:
        """Update whitelisted columns of one row. Returns True if a row changed."""
        allowed = _UPDATABLE[table]
        values = {k: v for k, v in fields.items() if k in allowed}
        if not values:
            return False
        assignments = ", ".join(f"{column} = ?" for column in values)
        params = list(values.values())
        if table == "journals":
            assignments += ", updated_at = ?"
            params.append(_now())
        with self._connection() as conn:
            cursor = conn.execute(
                f"UPDATE {table} SET {assignments} WHERE id = ?",
                (*params, row_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    # ── Journals ──────────────────────────────────────────────────────

    def create_journal(self, journal: Journal) -> Journal:
        """Insert a journal and return it with id and timestamps set."""
        now = _now()
        journal.id = journal.id or _new_id()
        journal.created_at = journal.updated_at = now
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO journals
                (id, tenant_id, name, code, issn, status, wordpress_url, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    journal.id,
                    journal.tenant_id,
                    journal.name,
                    journal.code,
                    journal.issn,
                    journal.status,
                    journal.wordpress_url,
                    now,
                    now,
                ),
            )
            conn.commit()
        return journal

    def get_journal(self, journal_id: str) -> Optional[Journal]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM journals WHERE id = ?", (journal_id,)).fetchone()
        return self._row_to_journal(row) if row else None

    def list_journals(
        self,
        tenant_id: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Journal]:
        """List journals, most recently updated first."""
        where, params = [], []
        if tenant_id is not None:
            where.append("tenant_id = ?")
            params.append(tenant_id)
        if status is not None:
            where.append("status = ?")
            params.append(status)
        if search:
            where.append("(name LIKE ? OR code LIKE ? OR issn LIKE ?)")
            params.extend([f"%{search}%"] * 3)
        where_sql = f"WHERE {' AND '.join(where)}" if where else ""
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM journals {where_sql} ORDER BY updated_at DESC",
                params,
            ).fetchall()
        return [self._row_to_journal(row) for row in rows]

    def update_journal(self, journal_id: str, **fields: Any) -> bool:
        return self._update_fields("journals", journal_id, fields)

    def touch_journal(self, journal_id: str) -> None:
        """Set the journal's ``updated_at`` to now."""
        with self._connection() as conn:
            conn.execute("UPDATE journals SET updated_at = ? WHERE id = ?", (_now(), journal_id))
            conn.commit()

    @staticmethod
    def _row_to_journal(row: sqlite3.Row) -> Journal:
        return Journal(
            id=row["id"],
            tenant_id=row["tenant_id"],
            name=row["name"],
            code=row["code"],
            issn=row["issn"],
            status=row["status"],
            wordpress_url=row["wordpress_url"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    # ── Papers ────────────────────────────────────────────────────────

    def create_paper(self, paper: Paper) -> Paper:
        """Insert a paper. Raises ConflictError if the DOI already exists."""
        now = _now()
        paper.id = paper.id or _new_id()
        paper.created_at = paper.created_at or now
        paper.updated_at = now
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO papers
                (id, tenant_id, journal_id, title, doi, authors, pub_date,
                 indexing_status, scholar_url, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    paper.id,
                    paper.tenant_id,
                    paper.journal_id,
                    paper.title,
                    paper.doi,
                    paper.authors,
                    paper.pub_date,
                    paper.indexing_status,
                    paper.scholar_url,
                    paper.created_at,
                    paper.updated_at,
                ),
            )
            conn.commit()
        return paper

    def upsert_paper_by_doi(self, paper: Paper) -> bool:
        """Insert *paper*, or refresh title and pub_date of the one with its DOI.

        Returns:
            True if a new paper was inserted, False if an existing one was updated
        """
        now = _now()
        with self._connection() as conn:
            cursor = conn.execute(
                "UPDATE papers SET title = ?, pub_date = ?, updated_at = ? WHERE doi = ?",
                (paper.title, paper.pub_date, now, paper.doi),
            )
            conn.commit()
            if cursor.rowcount > 0:
                return False
        self.create_paper(paper)
        return True

    def get_paper(self, paper_id: str) -> Optional[Paper]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM papers WHERE id = ?", (paper_id,)).fetchone()
        return self._row_to_paper(row) if row else None

    def list_papers(
        self,
        tenant_id: Optional[str] = None,
        journal_id: Optional[str] = None,
        indexing_status: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Paper]:
        """List papers, newest first, with optional filters."""
        where, params = [], []
        if tenant_id is not None:
            where.append("tenant_id = ?")
            params.append(tenant_id)
        if journal_id is not None:
            where.append("journal_id = ?")
            params.append(journal_id)
        if indexing_status is not None:
            where.append("indexing_status = ?")
            params.append(indexing_status)
        if search:
            where.append("(title LIKE ? OR authors LIKE ? OR doi LIKE ?)")
            params.extend([f"%{search}%"] * 3)
        where_sql = f"WHERE {' AND '.join(where)}" if where else ""
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT ?"
            params.append(limit)
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM papers {where_sql} ORDER BY created_at DESC, id {limit_sql}",
                params,
            ).fetchall()
        return [self._row_to_paper(row) for row in rows]

    def update_paper_indexing(
        self,
        paper_id: str,
        indexing_status: str,
        scholar_url: Optional[str],
    ) -> Paper:
        """Record a verification result and return the updated paper."""
        with self._connection() as conn:
            cursor = conn.execute(
                """
                UPDATE papers SET indexing_status = ?, scholar_url = ?, updated_at = ?
                WHERE id = ?
                """,
                (indexing_status, scholar_url, _now(), paper_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise NotFoundError("Paper not found", resource="paper")
        return self.get_paper(paper_id)  # type: ignore[return-value]

    def papers_due_for_verification(self, stale_before: str, limit: int) -> list[Paper]:
        """Papers never found indexed, or not indexed and unchecked since *stale_before*."""
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT * FROM papers
                WHERE indexing_status = 'NOT_INDEXED'
                   OR (indexing_status != 'INDEXED' AND updated_at < ?)
                ORDER BY updated_at ASC
                LIMIT ?
                """,
                (stale_before, limit),
            ).fetchall()
        return [self._row_to_paper(row) for row in rows]

    @staticmethod
    def _row_to_paper(row: sqlite3.Row) -> Paper:
        return Paper(
            id=row["id"],
            tenant_id=row["tenant_id"],
            journal_id=row["journal_id"],
            title=row["title"],
            doi=row["doi"],
            authors=row["authors"],
            pub_date=row["pub_date"],
            indexing_status=row["indexing_status"],
            scholar_url=row["scholar_url"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    # ── Reviewers ─────────────────────────────────────────────────────

    def create_reviewer(self, reviewer: Reviewer) -> Reviewer:
        """Insert a reviewer. Raises ConflictError if the email already exists."""
        reviewer.id = reviewer.id or _new_id()
        reviewer.created_at = _now()
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO reviewers
                (id, tenant_id, first_name, last_name, email, institution, expertise, rating, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    reviewer.id,
                    reviewer.tenant_id,
                    reviewer.first_name,
                    reviewer.last_name,
                    reviewer.email,
                    reviewer.institution,
                    reviewer.expertise,
                    reviewer.rating,
                    reviewer.created_at,
                ),
            )
            conn.commit()
        return reviewer

    def get_reviewer(self, reviewer_id: str) -> Optional[Reviewer]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM reviewers WHERE id = ?", (reviewer_id,)).fetchone()
        return self._row_to_reviewer(row) if row else None

    def list_reviewers(self, tenant_id: Optional[str] = None) -> list[Reviewer]:
        """List reviewers ordered by last name, then first name, then creation."""
        params: tuple = ()
        where_sql = ""
        if tenant_id is not None:
            where_sql = "WHERE tenant_id = ?"
            params = (tenant_id,)
        with self._connection() as conn:
            rows = conn.execute(
                f"""
                SELECT * FROM reviewers {where_sql}
                ORDER BY last_name COLLATE NOCASE, first_name COLLATE NOCASE, created_at
                """,
                params,
            ).fetchall()
        return [self._row_to_reviewer(row) for row in rows]

    def update_reviewer(self, reviewer_id: str, **fields: Any) -> bool:
        return self._update_fields("reviewers", reviewer_id, fields)

    def delete_reviewer(self, reviewer_id: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM reviewers WHERE id = ?", (reviewer_id,))
            conn.commit()
            return cursor.rowcount > 0

    @staticmethod
    def _row_to_reviewer(row: sqlite3.Row) -> Reviewer:
        return Reviewer(
            id=row["id"],
            tenant_id=row["tenant_id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            institution=row["institution"],
            expertise=row["expertise"],
            rating=row["rating"],
            created_at=row["created_at"],
        )

    # ── Database configs ──────────────────────────────────────────────

    def create_database_config(self, config: DatabaseConfig) -> DatabaseConfig:
        config.id = config.id or _new_id()
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO database_configs (id, tenant_id, name, enabled, check_frequency)
                VALUES (?, ?, ?, ?, ?)
                """,
                (config.id, config.tenant_id, config.name, int(config.enabled), config.check_frequency),
            )
            conn.commit()
        return config

    def get_database_config(self, config_id: str) -> Optional[DatabaseConfig]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM database_configs WHERE id = ?", (config_id,)
            ).fetchone()
        return self._row_to_database_config(row) if row else None

    def list_database_configs(
        self,
        tenant_id: Optional[str] = None,
        enabled_only: bool = False,
    ) -> list[DatabaseConfig]:
        """List database configs ordered by name."""
        where, params = [], []
        if tenant_id is not None:
            where.append("tenant_id = ?")
            params.append(tenant_id)
        if enabled_only:
            where.append("enabled = 1")
        where_sql = f"WHERE {' AND '.join(where)}" if where else ""
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM database_configs {where_sql} ORDER BY name COLLATE NOCASE",
                params,
            ).fetchall()
        return [self._row_to_database_config(row) for row in rows]

    def update_database_config(self, config_id: str, **fields: Any) -> bool:
        if "enabled" in fields:
            fields["enabled"] = int(bool(fields["enabled"]))
        return self._update_fields("database_configs", config_id, fields)

    @staticmethod
    def _row_to_database_config(row: sqlite3.Row) -> DatabaseConfig:
        return DatabaseConfig(
            id=row["id"],
            tenant_id=row["tenant_id"],
            name=row["name"],
            enabled=bool(row["enabled"]),
            check_frequency=row["check_frequency"],
        )

    # ── Database applications ─────────────────────────────────────────

    def upsert_application(self, application: DatabaseApplication) -> DatabaseApplication:
        """Create the application for its (journal, database) pair or update it.

        On update only ``status``, ``notes`` and ``submitted_at`` change.
        """
        now = _now()
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO database_applications
                (id, tenant_id, journal_id, database_config_id, status, notes,
                 submitted_at, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(journal_id, database_config_id) DO UPDATE SET
                    status = excluded.status,
                    notes = excluded.notes,
                    submitted_at = COALESCE(excluded.submitted_at, submitted_at),
                    updated_at = excluded.updated_at
                """,
                (
                    application.id or _new_id(),
                    application.tenant_id,
                    application.journal_id,
                    application.database_config_id,
                    application.status,
                    application.notes,
                    application.submitted_at,
                    now,
                    now,
                ),
            )
            conn.commit()
        apps = self.list_applications(
            journal_id=application.journal_id,
            database_config_id=application.database_config_id,
        )
        return apps[0]

    def list_applications(
        self,
        journal_id: Optional[str] = None,
        database_config_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> list[DatabaseApplication]:
        """List applications joined with their database config name."""
        where, params = [], []
        if journal_id is not None:
            where.append("a.journal_id = ?")
            params.append(journal_id)
        if database_config_id is not None:
            where.append("a.database_config_id = ?")
            params.append(database_config_id)
        if tenant_id is not None:
            where.append("a.tenant_id = ?")
            params.append(tenant_id)
        where_sql = f"WHERE {' AND '.join(where)}" if where else ""
        with self._connection() as conn:
            rows = conn.execute(
                f"""
                SELECT a.*, c.name AS database_name
                FROM database_applications a
                JOIN database_configs c ON c.id = a.database_config_id
                {where_sql}
                ORDER BY c.name COLLATE NOCASE
                """,
                params,
            ).fetchall()
        return [
            DatabaseApplication(
                id=row["id"],
                tenant_id=row["tenant_id"],
                journal_id=row["journal_id"],
                database_config_id=row["database_config_id"],
                status=row["status"],
                notes=row["notes"],
                submitted_at=row["submitted_at"],
                database_name=row["database_name"],
                created_at=row["created_at"],
                updated_at=row["updated_at"],
            )
            for row in rows
        ]

    # ── Audit log ─────────────────────────────────────────────────────

    def log_action(
        self,
        action: str,
        tenant_id: str,
        details: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> None:
        """Append an audit log entry."""
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO audit_logs (tenant_id, user_id, action, details, timestamp)
                VALUES (?, ?, ?, ?, ?)
                """,
                (tenant_id, user_id, action, details, _now()),
            )
            conn.commit()

    def list_audit_logs(
        self,
        tenant_id: Optional[str] = None,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """Return audit log entries, newest first."""
        params: list[Any] = []
        where_sql = ""
        if tenant_id is not None:
            where_sql = "WHERE tenant_id = ?"
            params.append(tenant_id)
        params.append(limit)
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT * FROM audit_logs {where_sql} ORDER BY timestamp DESC, id DESC LIMIT ?",
                params,
            ).fetchall()
        return [
            {
                "id": row["id"],
                "tenantId": row["tenant_id"],
                "userId": row["user_id"],
                "action": row["action"],
                "details": row["details"],
                "timestamp": row["timestamp"],
            }
            for row in rows
        ]
