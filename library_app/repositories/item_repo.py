from library_app.models.item import LibraryItem
from library_app.extensions import db


class ItemRepo:
    @staticmethod
    def list_all(item_type=None):
        query = LibraryItem.query
        if item_type is not None:
            query = query.filter_by(item_type=item_type)
        return query.order_by(LibraryItem.id).all()

    @staticmethod
    def get(item_id: int):
        return db.session.get(LibraryItem, item_id)

    @staticmethod
    def get_by_identifier(item_type, identifier: str):
        return LibraryItem.query.filter_by(item_type=item_type, identifier=identifier).first()

    @staticmethod
    def add(item: LibraryItem):
        db.session.add(item)
        return item

    @staticmethod
    def commit():
        db.session.commit()
