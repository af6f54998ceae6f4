"""Stock status classification."""

from enum import Enum

LOW_STOCK_LIMIT = 10


class StockStatus(str, Enum):
    """Derived classification of a product's stock level."""

    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


def stock_status(stock: int) -> StockStatus:
    """Classify a stock level.

    0 is out of stock, 1..10 is low stock, anything above is in stock.
    """
    if stock <= 0:
        return StockStatus.OUT_OF_STOCK
    if stock <= LOW_STOCK_LIMIT:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK
