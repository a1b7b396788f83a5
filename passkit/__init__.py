from .container import WalletServices, build_services
from .log_sink import LogSink
from .models import LogRequest, PassRequest, RegisterRequest, SerialNumbersRequest, UnregisterRequest
from .pass_fetch import PassFetchService
from .registration import RegistrationService
from .results import ErrorKind, Outcome, ServiceResult
from .sync_query import SyncQueryService
from .tags import parse_tag
from .unregistration import UnregistrationService

__all__ = [
    "WalletServices",
    "build_services",
    "LogSink",
    "LogRequest",
    "PassRequest",
    "RegisterRequest",
    "SerialNumbersRequest",
    "UnregisterRequest",
    "PassFetchService",
    "RegistrationService",
    "ErrorKind",
    "Outcome",
    "ServiceResult",
    "SyncQueryService",
    "parse_tag",
    "UnregistrationService",
]
