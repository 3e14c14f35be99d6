from sqlalchemy import CheckConstraint, Column, Integer, String, Numeric, ForeignKey

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),)
