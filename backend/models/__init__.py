"""Declarative base for the locations/votes tables.

Constraint names follow one convention so ORM-created schemas (tests, ad-hoc
tooling) name keys the same way on every backend.
"""
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "pk": "%(table_name)s_pkey",
    "fk": "%(table_name)s_%(column_0_name)s_fkey",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
