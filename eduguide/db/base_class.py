# /eduguide/db/base_class.py

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """
    Declarative base for every ORM model.

    Table names are derived automatically by pluralizing the lower-cased class
    name (`Student` -> `students`). Models can still override `__tablename__`.
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"
