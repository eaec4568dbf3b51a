from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float = 0.0
    pictureUrl: Optional[str] = None
    productType: Optional[str] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Product":
        payload = dict(data)
        payload["id"] = doc_id
        return cls.model_validate(payload)

    def to_document(self) -> Dict[str, Any]:
        # The document key is the id; it is not duplicated in the body.
        return self.model_dump(exclude={"id"})


class CreateProductRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    pictureUrl: Optional[str] = None
    productType: Optional[str] = None


class UpdateProductRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    pictureUrl: Optional[str] = None
    productType: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually supplied; nulls leave the stored value alone."""
        return self.model_dump(exclude_none=True)


DEMO_PRODUCTS: list[Dict[str, Any]] = [
    {
        "name": "Nike Air Max 270",
        "description": "Men's Running Shoes with Air cushioning",
        "price": 150.0,
        "pictureUrl": "https://static.nike.com/a/images/t_PDP_1728_v1/f_auto,q_auto:eco/covmdnim1rkbkbxtm23v/NIKE+AIR+MAX+270+%28GS%29.png",
        "productType": "Footwear",
    },
    {
        "name": "Samsung Galaxy S25",
        "description": '5G Smartphone with 6.2" Display',
        "price": 799.0,
        "pictureUrl": "https://images.samsung.com/vn/smartphones/galaxy-s25/buy/kv_comparison_Inch_PC.jpg?imbypass=true",
        "productType": "Electronics",
    },
    {
        "name": "Levi's 501 Original",
        "description": "Classic straight fit jeans",
        "price": 69.50,
        "pictureUrl": "https://lsco.scene7.com/is/image/lsco/005010101-front-pdp-ld?fmt=jpeg&qlt=70&resMode=sharp2&fit=crop,1&op_usm=0.6,0.6,8&wid=880&hei=880",
        "productType": "Apparel",
    },
    {
        "name": "Sony WH-1000XM5",
        "description": "Wireless Noise Cancelling Headphones",
        "price": 349.99,
        "pictureUrl": "https://www.sony.com.vn/image/1faff1a8d2f9b518cb2ef53f2c1d5af3?fmt=png-alpha&wid=1440",
        "productType": "Electronics",
    },
]
