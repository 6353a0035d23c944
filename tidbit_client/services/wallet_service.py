from web3 import Web3
from eth_account.messages import encode_defunct
import logging
from abc import ABC, abstractmethod
from typing import Callable, List

from ..exceptions import WalletRejectedError

logger = logging.getLogger(__name__)


class WalletProvider(ABC):
    """
    The two wallet capabilities the login flow relies on.

    Mirrors the injected browser wallet's ``eth_requestAccounts`` and
    ``personal_sign`` methods. Either call may raise
    ``WalletRejectedError`` when the user declines.
    """

    @abstractmethod
    def request_accounts(self) -> List[str]:
        pass

    @abstractmethod
    def personal_sign(self, message: str, address: str) -> str:
        pass


class LocalWalletProvider(WalletProvider):
    """
    Wallet backed by a locally held EVM private key.

    ``approve`` is asked before exposing the account and before every
    signature, with a short prompt text. Returning False is treated as
    the user rejecting the request.
    """

    def __init__(self, private_key: str, approve: Callable[[str], bool] | None = None):
        try:
            self.account = Web3().eth.account.from_key(private_key)
        except ValueError as e:
            logger.error(f"Invalid wallet private key: {e}")
            raise
        self.approve = approve
        logger.info(f"Local wallet loaded. Address: {self.account.address}")

    def _ask(self, prompt: str):
        if self.approve is not None and not self.approve(prompt):
            raise WalletRejectedError(f"User rejected: {prompt}")

    def request_accounts(self) -> List[str]:
        self._ask(f"Connect account {self.account.address}?")
        return [self.account.address]

    def personal_sign(self, message: str, address: str) -> str:
        if address.lower() != self.account.address.lower():
            raise WalletRejectedError(f"Address {address} is not managed by this wallet.")
        self._ask(f"Sign message with {self.account.address}?\n\n{message}")
        signed = self.account.sign_message(encode_defunct(text=message))
        return Web3.to_hex(signed.signature)
