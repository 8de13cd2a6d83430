from pydantic import BaseModel, Field, computed_field
from typing import Any, Dict, List, Optional
from datetime import datetime

from .synonyms import synonyms_for

class CategoryOut(BaseModel):
    id: str
    name: str
    slug: str
    image_url: Optional[str] = None

    @computed_field
    @property
    def synonyms(self) -> List[str]:
        return sorted(synonyms_for(self.slug))

    class Config:
        from_attributes = True
        frozen = True

class ProductOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[CategoryOut] = None
    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    discount_percent: Optional[int] = None
    stock: int = 0
    images: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    reviews_count: int = 0
    highlights: List[str] = Field(default_factory=list)
    specifications: Dict[str, str] = Field(default_factory=dict)

    class Config:
        from_attributes = True

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else ""

class CartLine(BaseModel):
    id: str
    product_id: str
    quantity: int = Field(..., ge=1)

class CartItemOut(BaseModel):
    id: str
    product_id: str
    quantity: int
    product: Optional[ProductOut] = None

class OrderTotals(BaseModel):
    subtotal: float
    original_subtotal: float
    discount: float
    shipping_cost: float
    grand_total: float

class CartOut(BaseModel):
    items: List[CartItemOut]
    item_count: int
    totals: OrderTotals

class AddToCartIn(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)

class UpdateQuantityIn(BaseModel):
    quantity: int

class ShippingAddress(BaseModel):
    name: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""

class CardDetails(BaseModel):
    card_number: str = ""
    expiry_date: str = ""
    cvv: str = ""
    holder_name: str = ""

class PaymentState(BaseModel):
    method: str = "COD"
    card_details: Optional[CardDetails] = None
    upi_id: Optional[str] = None

class PaymentResult(BaseModel):
    success: bool
    transaction_id: str = ""
    message: Optional[str] = None

class PaymentInfo(BaseModel):
    method: str
    status: str
    transaction_id: Optional[str] = None

class OrderItemOut(BaseModel):
    id: str
    product_id: str
    product_name: str
    product_image: Optional[str]
    price: float
    quantity: int

    class Config:
        from_attributes = True

class OrderOut(BaseModel):
    id: str
    created_at: datetime
    order_number: str
    user_id: Optional[str] = None
    shipping_name: str
    shipping_phone: str
    shipping_address: str
    shipping_city: str
    shipping_state: str
    shipping_pincode: str
    subtotal: float
    shipping_cost: float
    total: float
    status: str
    payment_method: str
    payment_status: str
    transaction_id: Optional[str]
    items: list[OrderItemOut] = Field(default_factory=list)

    class Config:
        from_attributes = True

class CheckoutIn(BaseModel):
    address: ShippingAddress
    payment: PaymentState = Field(default_factory=PaymentState)
    email: Optional[str] = None
    user_id: Optional[str] = None

class WishlistEntry(BaseModel):
    id: str
    name: str
    price: float
    original_price: Optional[float] = None
    discount_percent: Optional[int] = None
    image: str = ""
    rating: Optional[float] = None
    reviews_count: int = 0

    @classmethod
    def from_product(cls, product: ProductOut) -> "WishlistEntry":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            original_price=product.original_price,
            discount_percent=product.discount_percent,
            image=product.images[0] if product.images else "",
            rating=product.rating,
            reviews_count=product.reviews_count,
        )

class NotificationContent(BaseModel):
    order_number: str
    total: float
    items: List[Dict[str, Any]]
