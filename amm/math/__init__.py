"""Pure pricing and share math for constant-product pools."""

from amm.math.liquidity import AddQuote, quote, quote_add, quote_remove
from amm.math.swap import get_amount_out

__all__ = [
    "AddQuote",
    "quote",
    "quote_add",
    "quote_remove",
    "get_amount_out",
]
