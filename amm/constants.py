"""Protocol constants for the pool engine.

Centralizes pricing parameters and well-known addresses.
"""

# Fixed-point scale for prices returned by get_price (1e18)
PRICE_SCALE = 10**18

# Swap fee as numerator/denominator (997/1000 keeps 0.3% in the pool)
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# Never a valid asset or recipient
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Deadline that never expires (uint256 max)
NO_DEADLINE = 2**256 - 1
