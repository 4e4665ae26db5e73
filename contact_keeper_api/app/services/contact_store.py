"""
SQLite-backed storage for contacts.

``ContactStore`` is the only code that issues SQL against the
``contacts`` table.  Each call opens its own connection, runs a single
statement (plus a read-back where a record is returned) and closes the
connection again, so there is no shared state between requests.

Driver faults are logged with their message and re-raised as
``InternalError`` by ``core.db.store_cursor``; callers never see driver
exceptions.  Ids outside the SQLite integer range match no contact.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from contact_keeper_api.app.core.db import is_row_id, store_cursor
from contact_keeper_api.app.schemas.contact import ContactRead

UPDATABLE_FIELDS = ("name", "email", "phone", "type")

_SELECT = "SELECT id, user_id, name, email, phone, type, date FROM contacts"


class ContactStore:
    """Persistence operations for contacts, keyed by generated integer ids."""

    @classmethod
    def find_by_owner(cls, owner_id: int) -> List[ContactRead]:
        """Return all contacts of ``owner_id``, most recent first.

        Equal timestamps fall back to the id so insertion order still
        decides.
        """
        with store_cursor("contacts.find_by_owner") as cursor:
            rows = cursor.execute(
                f"{_SELECT} WHERE user_id = ? ORDER BY date DESC, id DESC",
                (owner_id,),
            ).fetchall()
        return [cls._row_to_contact(row) for row in rows]

    @classmethod
    def find_by_id(cls, contact_id: int) -> Optional[ContactRead]:
        if not is_row_id(contact_id):
            return None
        with store_cursor("contacts.find_by_id") as cursor:
            row = cursor.execute(f"{_SELECT} WHERE id = ?", (contact_id,)).fetchone()
        return cls._row_to_contact(row) if row else None

    @classmethod
    def insert(cls, owner_id: int, fields: Dict[str, Any]) -> ContactRead:
        """Insert a contact owned by ``owner_id`` and return the stored row.

        ``type`` falls back to ``personal`` when not given.
        """
        with store_cursor("contacts.insert") as cursor:
            cursor.execute(
                """
                INSERT INTO contacts (user_id, name, email, phone, type)
                VALUES (?, ?, ?, ?, COALESCE(?, 'personal'))
                """,
                (
                    owner_id,
                    fields["name"],
                    fields.get("email"),
                    fields.get("phone"),
                    fields.get("type"),
                ),
            )
            row = cursor.execute(f"{_SELECT} WHERE id = ?", (cursor.lastrowid,)).fetchone()
        return cls._row_to_contact(row)

    @classmethod
    def update_by_id(cls, contact_id: int, fields: Dict[str, Any]) -> Optional[ContactRead]:
        """Set ``fields`` on a contact and return the updated record.

        Only columns in ``UPDATABLE_FIELDS`` are written; the owner and
        creation date cannot be changed here.  Returns ``None`` if the
        contact no longer exists.
        """
        if not is_row_id(contact_id):
            return None
        assignments = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
        with store_cursor("contacts.update_by_id") as cursor:
            if assignments:
                set_clause = ", ".join(f"{key} = ?" for key in assignments)
                cursor.execute(
                    f"UPDATE contacts SET {set_clause} WHERE id = ?",
                    (*assignments.values(), contact_id),
                )
            row = cursor.execute(f"{_SELECT} WHERE id = ?", (contact_id,)).fetchone()
        return cls._row_to_contact(row) if row else None

    @classmethod
    def delete_by_id(cls, contact_id: int) -> bool:
        """Delete a contact.  Returns ``True`` if a row was removed."""
        if not is_row_id(contact_id):
            return False
        with store_cursor("contacts.delete_by_id") as cursor:
            cursor.execute("DELETE FROM contacts WHERE id = ?", (contact_id,))
            return cursor.rowcount > 0

    @staticmethod
    def _row_to_contact(row: sqlite3.Row) -> ContactRead:
        return ContactRead(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            type=row["type"],
            user=row["user_id"],
            date=row["date"],
        )
