"""
Process-wide application context.
Built once at startup and handed to request handlers through get_context().
"""
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from fastapi import Request

import database
from config import Settings
from services import (
    DonorStore, RequestStore, MatchingEngine, InventoryAggregator,
    NotificationDispatcher, AdminGate, AuditService, RequestIntake, build_channels
)


@dataclass
class AppContext:
    settings: Settings
    client: object
    db: object
    donors: DonorStore
    requests: RequestStore
    matcher: MatchingEngine
    inventory: InventoryAggregator
    dispatcher: NotificationDispatcher
    admin_gate: AdminGate
    audit: AuditService
    intake: RequestIntake

    @classmethod
    def build(cls, settings: Settings, client=None, channels: Optional[list] = None) -> "AppContext":
        client = client if client is not None else database.create_client(settings)
        db = database.get_database(client, settings)

        donors = DonorStore(db)
        requests = RequestStore(db)
        matcher = MatchingEngine(donors, limit=settings.match_limit)
        dispatcher = NotificationDispatcher(build_channels(settings) if channels is None else channels)

        return cls(
            settings=settings,
            client=client,
            db=db,
            donors=donors,
            requests=requests,
            matcher=matcher,
            inventory=InventoryAggregator(donors),
            dispatcher=dispatcher,
            admin_gate=AdminGate(
                settings.admin_key,
                settings.jwt_secret,
                ttl=timedelta(hours=settings.token_ttl_hours),
            ),
            audit=AuditService(db),
            intake=RequestIntake(requests, matcher, dispatcher),
        )

    async def close(self):
        await self.dispatcher.drain()
        self.client.close()


def get_context(request: Request) -> AppContext:
    return request.app.state.context
