from __future__ import annotations

import logging

from core import settings
from storage.gateway import StorageUnavailable, WalletStore

from .models import PassRequest
from .results import ErrorKind, ServiceResult

logger = logging.getLogger(__name__)


class PassFetchService:
    def __init__(self, store: WalletStore, *, not_found_status: int | None = None) -> None:
        self.store = store
        self.not_found_status = int(not_found_status or settings.PASSKIT_NOT_FOUND_STATUS)

    def get_pass(self, req: PassRequest) -> ServiceResult:
        """Conditional read: 304 when the client's tag already covers the stored one."""
        try:
            found = self.store.get_pass(
                pass_type_identifier=req.pass_type_identifier,
                serial_number=req.serial_number,
            )
        except StorageUnavailable as e:
            logger.exception(f"getPass failed: pass={req.pass_type_identifier}/{req.serial_number} err={e}")
            return ServiceResult.failure(ErrorKind.STORAGE_UNAVAILABLE, message=str(e))

        if found is None:
            return ServiceResult.failure(
                ErrorKind.NOT_FOUND,
                status=self.not_found_status,
                message="pass not found",
            )

        # No header means the client holds no copy: always send the pass.
        if req.if_modified_since is not None and found["last_updated"] <= req.if_modified_since:
            return ServiceResult.unchanged()

        body = dict(found["payload"])
        body.update(
            {
                "passTypeIdentifier": found["pass_type_identifier"],
                "serialNumber": found["serial_number"],
                "lastUpdated": found["last_updated"],
            }
        )
        return ServiceResult.with_data(body)
