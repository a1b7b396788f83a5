from __future__ import annotations

import logging

from storage.gateway import StorageUnavailable, WalletStore

from .models import RegisterRequest
from .results import ErrorKind, ServiceResult

logger = logging.getLogger(__name__)


class RegistrationService:
    """Device -> pass subscriptions.

    Re-registering a known triple only refreshes the device push token.
    """

    def __init__(self, store: WalletStore) -> None:
        self.store = store

    def register(self, req: RegisterRequest) -> ServiceResult:
        try:
            created = self.store.register_device(
                device_library_identifier=req.device_library_identifier,
                pass_type_identifier=req.pass_type_identifier,
                serial_number=req.serial_number,
                push_token=req.push_token,
            )
        except StorageUnavailable as e:
            logger.exception(f"register failed: device={req.device_library_identifier!r} err={e}")
            return ServiceResult.failure(ErrorKind.STORAGE_UNAVAILABLE, message=str(e))

        if created:
            logger.info(
                f"registered device={req.device_library_identifier!r} "
                f"pass={req.pass_type_identifier}/{req.serial_number}"
            )
            return ServiceResult.no_data(status=201)
        return ServiceResult.no_data(status=200)

