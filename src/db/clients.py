"""Client roster queries.

The `clients` table belongs to the web application; this module only reads it. Values are always
passed as bound parameters.
"""

from __future__ import annotations

from psycopg import AsyncConnection
from psycopg.rows import dict_row

from src.intent.schema import Client, client_from_obj

_ROSTER_SQL = (
    "SELECT c.id::text AS id,"
    "       c.company_id::text AS company_id,"
    "       c.type, c.first_name, c.last_name, c.email, c.phone"
    "  FROM clients c"
    " WHERE c.company_id = %s"
    " ORDER BY c.created_at, c.id"
)


async def fetch_clients(conn: AsyncConnection, company_id: str) -> list[Client]:
    """Return the roster of a company, oldest clients first.

    Roster order matters to the matchers (first match wins), so the ordering is fixed here.
    DB errors are not swallowed (caller decides how to handle them).
    """

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(_ROSTER_SQL, (company_id,))
        rows = await cur.fetchall()

    return [client_from_obj(row) for row in rows]
