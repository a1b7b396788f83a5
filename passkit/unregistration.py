from __future__ import annotations

import logging

from core import settings
from storage.gateway import StorageUnavailable, WalletStore

from .models import UnregisterRequest
from .results import ErrorKind, ServiceResult

logger = logging.getLogger(__name__)


class UnregistrationService:
    """Removes one registration. Device and pass records are left alone."""

    def __init__(self, store: WalletStore, *, not_found_status: int | None = None) -> None:
        self.store = store
        self.not_found_status = int(not_found_status or settings.PASSKIT_NOT_FOUND_STATUS)

    def unregister(self, req: UnregisterRequest) -> ServiceResult:
        try:
            deleted = self.store.delete_registration(
                device_library_identifier=req.device_library_identifier,
                pass_type_identifier=req.pass_type_identifier,
                serial_number=req.serial_number,
            )
        except StorageUnavailable as e:
            logger.exception(f"unregister failed: device={req.device_library_identifier!r} err={e}")
            return ServiceResult.failure(ErrorKind.STORAGE_UNAVAILABLE, message=str(e))

        if not deleted:
            return ServiceResult.failure(
                ErrorKind.NOT_FOUND,
                status=self.not_found_status,
                message="registration not found",
            )

        logger.info(
            f"unregistered device={req.device_library_identifier!r} "
            f"pass={req.pass_type_identifier}/{req.serial_number}"
        )
        return ServiceResult.no_data(status=200)
