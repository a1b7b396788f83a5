from __future__ import annotations

from dataclasses import dataclass

from storage.gateway import WalletStore

from .log_sink import LogSink
from .pass_fetch import PassFetchService
from .registration import RegistrationService
from .sync_query import SyncQueryService
from .unregistration import UnregistrationService


@dataclass(frozen=True)
class WalletServices:
    store: WalletStore
    registration: RegistrationService
    sync_query: SyncQueryService
    pass_fetch: PassFetchService
    unregistration: UnregistrationService
    log_sink: LogSink


def build_services(store: WalletStore, *, not_found_status: int | None = None) -> WalletServices:
    return WalletServices(
        store=store,
        registration=RegistrationService(store),
        sync_query=SyncQueryService(store),
        pass_fetch=PassFetchService(store, not_found_status=not_found_status),
        unregistration=UnregistrationService(store, not_found_status=not_found_status),
        log_sink=LogSink(),
    )
