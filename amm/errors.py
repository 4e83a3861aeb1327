"""Pool engine error classes.

Every error aborts the whole operation. Each class carries a stable `code`
so callers can branch on the failure reason without parsing messages.
"""

from typing import ClassVar


class AMMError(Exception):
    """Base error for pool engine operations."""

    code: ClassVar[str] = "AMM_ERROR"
    kind: ClassVar[str] = "error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.__doc__ or self.code
        super().__init__(self.detail)


# --- Validation -------------------------------------------------------------


class ValidationError(AMMError):
    """Request parameters are invalid."""

    code = "INVALID"
    kind = "validation"


class DeadlineExpired(ValidationError):
    """Operation deadline has passed."""

    code = "EXPIRED"


class InvalidRecipient(ValidationError):
    """Recipient must be a non-zero address."""

    code = "INVALID_RECIPIENT"


class InvalidPath(ValidationError):
    """Swap path must contain exactly two assets."""

    code = "INVALID_PATH"


class IdenticalAssets(ValidationError):
    """Pair assets must be different."""

    code = "IDENTICAL_ADDRESSES"


class ZeroAddress(ValidationError):
    """Asset must be a non-zero address."""

    code = "ZERO_ADDRESS"


class InvalidAmount(ValidationError):
    """Amount must be an integer in the uint256 range."""

    code = "INVALID_AMOUNT"


class ZeroAmount(ValidationError):
    """Amount must be greater than zero."""

    code = "ZERO_AMOUNT"


class InsufficientAmount(ValidationError):
    """Deposit amounts must be greater than zero."""

    code = "INSUFFICIENT_AMOUNT"


class InsufficientInputAmount(ValidationError):
    """Swap input amount must be greater than zero."""

    code = "INSUFFICIENT_INPUT_AMOUNT"


# --- Slippage ---------------------------------------------------------------


class SlippageError(AMMError):
    """Executed amount violates a caller-supplied minimum."""

    code = "SLIPPAGE"
    kind = "slippage"


class InsufficientAAmount(SlippageError):
    """Amount of asset A is below the requested minimum."""

    code = "INSUFFICIENT_A_AMOUNT"


class InsufficientBAmount(SlippageError):
    """Amount of asset B is below the requested minimum."""

    code = "INSUFFICIENT_B_AMOUNT"


class InsufficientOutputAmount(SlippageError):
    """Swap output is below the requested minimum."""

    code = "INSUFFICIENT_OUTPUT_AMOUNT"


# --- Liquidity --------------------------------------------------------------


class LiquidityError(AMMError):
    """Pool liquidity does not allow the operation."""

    code = "LIQUIDITY"
    kind = "liquidity"


class InsufficientLiquidity(LiquidityError):
    """Pool has no liquidity for this pair."""

    code = "INSUFFICIENT_LIQUIDITY"


class InsufficientLiquidityMinted(LiquidityError):
    """Deposit is too small to mint any liquidity shares."""

    code = "INSUFFICIENT_LIQUIDITY_MINTED"


class InsufficientShares(LiquidityError):
    """Burn amount exceeds the caller's liquidity share."""

    code = "INSUFFICIENT_SHARES"


# --- Collaborators ----------------------------------------------------------


class ReentrantCall(AMMError):
    """Operation attempted while another operation is in progress."""

    code = "LOCKED"
    kind = "reentrancy"


class TransferFailed(AMMError):
    """Ledger could not move the requested balance."""

    code = "TRANSFER_FAILED"
    kind = "transfer"
