from inventory.table.cabinet import Cabinet
from inventory.table.item import Item

__all__ = [
    "Cabinet",
    "Item",
]
