# dritu/server/models/product.py
from sqlmodel import SQLModel, Field
from typing import Optional


class ProductBase(SQLModel):
    name: str
    make: str = ""
    model: str = ""
    specification: str = ""
    hsn_code: str = ""
    price: float = Field(default=0.0, ge=0)
    gst_rate: float = Field(default=18.0, ge=0, le=100)


class Product(ProductBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    # derived from price + gst_rate on every save
    gst: float = 0.0
    total_price: float = 0.0
