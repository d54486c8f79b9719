# services/server_store.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from exceptions import ServerNotFound, StoreError
from models.record import ServerRecord
from models.server import ServerRow
from services.validation import canonical_address
from utils.db import async_session_maker

log = logging.getLogger(__name__)


def _to_record(row: ServerRow) -> ServerRecord:
    return ServerRecord(
        address=row.address,
        hostname=row.hostname,
        players=row.players,
        max_players=row.max_players,
        gamemode=row.gamemode,
        language=row.language,
        password=row.password,
        rules=dict(row.rules or {}),
        player_list=list(row.player_list or []),
    )


class ServerStore:
    """Servers keyed by their canonical host:port address."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get(self, address: str) -> ServerRecord:
        address = canonical_address(address)
        try:
            async with self._session_maker() as s:
                res = await s.execute(select(ServerRow).where(ServerRow.address == address))
                row = res.scalar_one_or_none()
                record = _to_record(row) if row else None
        except SQLAlchemyError as e:
            log.exception("[store] lookup of %s failed", address)
            raise StoreError(f"failed to look up server '{address}'") from e

        if record is None:
            raise ServerNotFound(f"server '{address}' not found")
        return record

    async def upsert(self, server: ServerRecord) -> ServerRecord:
        """Create or update the stored server, returning it as stored."""
        server = server.model_copy(update={"address": canonical_address(server.address)})
        try:
            async with self._session_maker() as s:
                res = await s.execute(select(ServerRow).where(ServerRow.address == server.address))
                row = res.scalar_one_or_none()
                if row is None:
                    row = ServerRow(address=server.address)
                    s.add(row)
                row.hostname = server.hostname
                row.players = server.players
                row.max_players = server.max_players
                row.gamemode = server.gamemode
                row.language = server.language
                row.password = server.password
                row.rules = dict(server.rules)
                row.player_list = list(server.player_list)
                await s.commit()
        except SQLAlchemyError as e:
            log.exception("[store] upsert of %s failed", server.address)
            raise StoreError(f"failed to store server '{server.address}'") from e

        log.info("[store] upserted %s (%s)", server.address, server.hostname)
        return server


def get_server_store() -> ServerStore:
    return ServerStore(async_session_maker)
