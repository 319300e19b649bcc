from inventory.client.qr_codec import (
    UNRECOGNIZED,
    EntityKind,
    QRPayload,
    decode_qr_payload,
    encode_qr_payload,
)
from inventory.client.errors import (
    BackendError,
    EntityNotFoundError,
    InvalidPayloadError,
    InventoryClientError,
    TransientNetworkError,
    ValidationError,
)
from inventory.client.api_client import InventoryApiClient, ReassignResult
from inventory.client.scan_resolver import (
    InvalidPayload,
    NavigateCabinet,
    NavigateItem,
    NotFound,
    ScanResolver,
    ScanState,
    TransientError,
)
from inventory.client.bulk_session import BulkScanSession, SubmitResult
from inventory.client.printer import LabelPrinterClient

__all__ = [
    "UNRECOGNIZED",
    "EntityKind",
    "QRPayload",
    "decode_qr_payload",
    "encode_qr_payload",
    "BackendError",
    "EntityNotFoundError",
    "InvalidPayloadError",
    "InventoryClientError",
    "TransientNetworkError",
    "ValidationError",
    "InventoryApiClient",
    "ReassignResult",
    "InvalidPayload",
    "NavigateCabinet",
    "NavigateItem",
    "NotFound",
    "ScanResolver",
    "ScanState",
    "TransientError",
    "BulkScanSession",
    "SubmitResult",
    "LabelPrinterClient",
]
