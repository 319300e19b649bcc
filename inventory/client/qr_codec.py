"""
QR 码内容编解码

格式为 `<kind>:<id>`，kind 只能是 cabinet 或 item，id 为不带前导零的正整数。
解码永不抛错，无法识别时返回 UNRECOGNIZED。
"""
import enum
import re
from dataclasses import dataclass
from typing import Union


class EntityKind(str, enum.Enum):
    CABINET = "cabinet"  # 櫥櫃
    ITEM = "item"        # 物品


@dataclass(frozen=True)
class QRPayload:
    kind: EntityKind
    id: int

    def encode(self) -> str:
        return encode_qr_payload(self.kind, self.id)


class _Unrecognized:
    """无法识别的扫码内容"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNRECOGNIZED"


UNRECOGNIZED = _Unrecognized()

DecodeResult = Union[QRPayload, _Unrecognized]

# 资料库 INTEGER 为 64 位有号整数
MAX_ENTITY_ID = 2 ** 63 - 1

_PAYLOAD_PATTERN = re.compile(r"(cabinet|item):([1-9][0-9]{0,18})")


def encode_qr_payload(kind: Union[EntityKind, str], entity_id: int) -> str:
    kind = EntityKind(kind)
    if not is_entity_id(entity_id):
        raise ValueError(f"entity id must be an integer in 1..{MAX_ENTITY_ID}, got {entity_id!r}")
    return f"{kind.value}:{entity_id}"


def decode_qr_payload(raw: object) -> DecodeResult:
    if not isinstance(raw, str):
        return UNRECOGNIZED

    # 整串比对，结尾换行也视为无效
    match = _PAYLOAD_PATTERN.fullmatch(raw)
    if match is None:
        return UNRECOGNIZED

    entity_id = int(match.group(2))
    if entity_id > MAX_ENTITY_ID:
        return UNRECOGNIZED

    return QRPayload(kind=EntityKind(match.group(1)), id=entity_id)


def is_entity_id(value: object) -> bool:
    """可存入资料库的正整数 id"""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= MAX_ENTITY_ID
