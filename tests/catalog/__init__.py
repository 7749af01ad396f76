"""Translatable models used across the test suite."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from model_translations import Base, TranslatableMixin


class Product(TranslatableMixin, Base):
    __tablename__ = "products"
    __translatable__ = ("name", "description")

    id = Column(Integer, primary_key=True, autoincrement=True)
    sku = Column(String(50), unique=True, nullable=False)
    price = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    shelf_id = Column(Integer, ForeignKey("shelves.id"), nullable=True)


class Shelf(Base):
    """Plain model holding translatable products through a relationship."""
    __tablename__ = "shelves"

    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(50), nullable=False)

    products = relationship("Product", order_by="Product.id")


class Category(TranslatableMixin, Base):
    __tablename__ = "categories"
    __translatable__ = ("title",)
    __translation_model__ = "catalog.translations.CategoryLabel"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(50), unique=True, nullable=False)


class Widget(TranslatableMixin, Base):
    """Uses the mixin but forgets __translatable__."""
    __tablename__ = "widgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), nullable=False)


class Gadget(TranslatableMixin, Base):
    """Declares 'slogan' translatable but its translation table has no such column."""
    __tablename__ = "gadgets"
    __translatable__ = ("tagline", "slogan")

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), nullable=False)


from catalog import translations  # noqa: E402,F401
