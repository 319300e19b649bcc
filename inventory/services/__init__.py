# Services layer for business logic
from inventory.services.cabinet.cabinet_create_service import create_cabinet
from inventory.services.cabinet.cabinet_read_service import read_cabinet, read_single_cabinet
from inventory.services.cabinet.cabinet_delete_service import delete_cabinet
from inventory.services.item.item_create_service import create_item
from inventory.services.item.item_read_service import read_item, read_single_item
from inventory.services.item.item_delete_service import delete_item
from inventory.services.item.item_move_service import move_items
