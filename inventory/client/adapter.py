"""
后端数据 -> 强类型实体

每种实体只有一个转换函数，同时兼容本服务返回的 JSON 对象
与旧版 PHP 服务按位置排列的行 `[id, name, description, photo, cabinet_id]`。
"""
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from inventory.schemas.cabinet_response import CabinetResponseModel
from inventory.schemas.item_response import ItemResponseModel

Cabinet = CabinetResponseModel
Item = ItemResponseModel

_CABINET_COLUMNS = ("id", "name", "description", "photo")
_ITEM_COLUMNS = ("id", "name", "description", "photo", "cabinet_id")


def cabinet_from_wire(row: Any) -> Cabinet:
    data = _to_mapping(row, _CABINET_COLUMNS)
    data["name"] = data.get("name") or f"Cabinet {data.get('id')}"
    return Cabinet.model_validate(data)


def item_from_wire(row: Any) -> Item:
    data = _to_mapping(row, _ITEM_COLUMNS)
    data["name"] = data.get("name") or f"Item {data.get('id')}"
    return Item.model_validate(data)


def cabinets_from_wire(rows: Iterable[Any]) -> List[Cabinet]:
    return [cabinet_from_wire(row) for row in rows]


def items_from_wire(rows: Iterable[Any]) -> List[Item]:
    return [item_from_wire(row) for row in rows]


def find_cabinet(cabinets: Iterable[Cabinet], cabinet_id: Optional[int]) -> Optional[Cabinet]:
    """找不到（悬空的 cabinet_id）时返回 None"""
    if cabinet_id is None:
        return None
    return next((cabinet for cabinet in cabinets if cabinet.id == cabinet_id), None)


def group_items_by_cabinet(
    cabinets: Iterable[Cabinet],
    items: Iterable[Item],
) -> Tuple[Dict[int, List[Item]], List[Item]]:
    """
    按櫥櫃分组物品

    Returns:
        (cabinet_id -> items, 不属于任何可显示櫥櫃的物品)
    """
    grouped: Dict[int, List[Item]] = {cabinet.id: [] for cabinet in cabinets}
    orphans: List[Item] = []
    for item in items:
        bucket = grouped.get(item.cabinet_id)
        if bucket is None:
            orphans.append(item)
        else:
            bucket.append(item)
    return grouped, orphans


def _to_mapping(row: Any, columns: Sequence[str]) -> Dict[str, Any]:
    if isinstance(row, dict):
        return dict(row)
    if isinstance(row, (list, tuple)):
        if len(row) < 2:
            raise ValueError(f"row too short: {row!r}")
        return dict(zip(columns, row))
    raise ValueError(f"unsupported row format: {row!r}")
