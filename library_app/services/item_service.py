from library_app.errors import ValidationError
from library_app.models.item import LibraryItem
from library_app.policy import ItemType, current_policy
from library_app.repositories.item_repo import ItemRepo


class ItemService:
    @staticmethod
    def list_items(item_type=None):
        if item_type is not None:
            item_type = ItemType.parse(item_type)
        return ItemRepo.list_all(item_type)

    @staticmethod
    def get_item(item_type, identifier: str):
        return ItemRepo.get_by_identifier(ItemType.parse(item_type), identifier)

    @staticmethod
    def add_item(item_type, identifier: str, title: str, creator: str = None, policy=None):
        item_type = ItemType.parse(item_type)
        identifier = (identifier or "").strip()
        title = (title or "").strip()
        if not identifier or not title:
            raise ValidationError("identifier and title are required")

        if ItemRepo.get_by_identifier(item_type, identifier):
            raise ValidationError(f"{item_type.name} {identifier} is already in the catalogue")

        policy = policy or current_policy()
        item = LibraryItem(
            item_type=item_type,
            identifier=identifier,
            title=title,
            creator=(creator or "").strip() or None,
            available=True,
            loan_period_days=policy.loan_period_for(item_type),
        )
        ItemRepo.add(item)
        ItemRepo.commit()
        return item
