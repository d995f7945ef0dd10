"""
SQLite-backed store for customers.

Email uniqueness is enforced by the ``UNIQUE`` constraint on
``customers.email``.  Name filtering uses ``instr`` and is therefore
case-sensitive: ``"Gus"`` matches ``"Gustavo"`` but ``"gus"`` does not.
"""

import json
import sqlite3
from typing import List, Optional

from ..core.db import get_connection, get_cursor
from ..models import Customer, CustomerStatus, Role

_COLUMNS = "id, name, email, password, status, roles"


def _row_to_customer(row: sqlite3.Row) -> Customer:
    return Customer(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password=row["password"],
        status=CustomerStatus(row["status"]),
        roles={Role(role) for role in json.loads(row["roles"] or "[]")},
    )


def _roles_json(customer: Customer) -> str:
    return json.dumps(sorted(role.value for role in customer.roles))


class CustomerRepository:
    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def save(self, customer: Customer) -> Customer:
        """Insert a new customer or overwrite an existing one.

        The customer's ``id`` is set on insert.  Returns the same object.
        """
        with get_cursor(self.db_path) as cursor:
            if customer.id is None:
                cursor.execute(
                    "INSERT INTO customers (name, email, password, status, roles) VALUES (?, ?, ?, ?, ?)",
                    (customer.name, customer.email, customer.password, customer.status.value, _roles_json(customer)),
                )
                customer.id = cursor.lastrowid
            else:
                cursor.execute(
                    "UPDATE customers SET name = ?, email = ?, password = ?, status = ?, roles = ?, "
                    "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (
                        customer.name,
                        customer.email,
                        customer.password,
                        customer.status.value,
                        _roles_json(customer),
                        customer.id,
                    ),
                )
        return customer

    def find_all(self) -> List[Customer]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM customers ORDER BY id").fetchall()
            return [_row_to_customer(row) for row in rows]
        finally:
            conn.close()

    def find_by_name_containing(self, name: str) -> List[Customer]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM customers WHERE instr(name, ?) > 0 ORDER BY id",
                (name,),
            ).fetchall()
            return [_row_to_customer(row) for row in rows]
        finally:
            conn.close()

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(f"SELECT {_COLUMNS} FROM customers WHERE id = ?", (customer_id,)).fetchone()
            return _row_to_customer(row) if row else None
        finally:
            conn.close()

    def find_by_email(self, email: str) -> Optional[Customer]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(f"SELECT {_COLUMNS} FROM customers WHERE email = ?", (email,)).fetchone()
            return _row_to_customer(row) if row else None
        finally:
            conn.close()

    def exists_by_id(self, customer_id: int) -> bool:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute("SELECT 1 FROM customers WHERE id = ?", (customer_id,)).fetchone()
            return row is not None
        finally:
            conn.close()

    def exists_by_email(self, email: str) -> bool:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute("SELECT 1 FROM customers WHERE email = ?", (email,)).fetchone()
            return row is not None
        finally:
            conn.close()
