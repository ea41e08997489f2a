from sqlalchemy import Column, Integer, String, Float
from inventory.adapters.secondary.database.config import Base

class ItemModel(Base):
    __tablename__ = "item"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("name", String, nullable=False)
    price = Column("price", Float, nullable=False)
    quantity_in_stock = Column("quantity", Integer, nullable=False)
