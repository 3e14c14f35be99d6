from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    # bez FK - katalog jest zewnetrzny, produkt moze zniknac
    product_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False, default=1)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="u_cart_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_item_quantity"),
    )
