from __future__ import annotations

import logging

from storage.gateway import StorageUnavailable, WalletStore

from .models import SerialNumbersRequest
from .results import ErrorKind, ServiceResult
from .tags import since_value

logger = logging.getLogger(__name__)


class SyncQueryService:
    """Which of a device's registered passes changed since the tag it presents.

    Candidate set: every existing pass behind one of the device's
    registrations for the pass type. A serial is returned when its
    last_updated is strictly greater than the presented tag. The next tag is
    one past the newest candidate, and never lower than the presented tag.
    """

    def __init__(self, store: WalletStore) -> None:
        self.store = store

    def get_serial_numbers(self, req: SerialNumbersRequest) -> ServiceResult:
        since = since_value(req.passes_updated_since)
        try:
            serials = self.store.registered_serials(
                device_library_identifier=req.device_library_identifier,
                pass_type_identifier=req.pass_type_identifier,
            )
            if not serials:
                return ServiceResult.not_applicable()

            tags = self.store.pass_tags(
                pass_type_identifier=req.pass_type_identifier,
                serial_numbers=serials,
            )
            clock = None if tags else self.store.pass_clock()
        except StorageUnavailable as e:
            logger.exception(f"getSerialNumbers failed: device={req.device_library_identifier!r} err={e}")
            return ServiceResult.failure(ErrorKind.STORAGE_UNAVAILABLE, message=str(e))

        updated = sorted(serial for serial, tag in tags.items() if tag > since)
        if tags:
            new_tag = max(max(tags.values()) + 1, since)
        elif since <= clock:
            new_tag = since + 1
        else:
            # Client is already past the clock; repeated polls must not push it further,
            # or a pass written later at clock + TAG_STEP could fall below its tag.
            new_tag = since

        return ServiceResult.with_data({"serialNumbers": updated, "lastUpdated": new_tag})
