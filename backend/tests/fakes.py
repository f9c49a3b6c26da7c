"""
In-memory stand ins for chain apis and supply sources.
"""

from peggedsupply.adapters.chain_api import ChainApi
from peggedsupply.adapters.helper.get_supply import CustomSource
from peggedsupply.balances import Balance, sum_single_balance
from peggedsupply.misc.sdk_cache import SdkCache


class FakeChainApi(ChainApi):
    """Serves raw integer amounts from dicts, raises for anything unknown."""

    def __init__(self, chain, supplies=None, decimals=None, balances=None):
        super().__init__(chain, timestamp=0, cache=SdkCache())
        self.supplies = supplies or {}
        self.token_decimals = decimals or {}
        self.balances = balances or {}
        self.closed = False
        self.calls = []

    async def total_supply(self, address, method="totalSupply"):
        self.calls.append(("total_supply", address, method))
        if address not in self.supplies:
            raise RuntimeError(f"execution reverted: unknown token {address}")
        return self.supplies[address]

    async def decimals(self, address):
        self.calls.append(("decimals", address))
        return self.token_decimals.get(address, 18)

    async def balance_of(self, token, owner):
        self.calls.append(("balance_of", token, owner))
        return self.balances.get((token, owner), 0)

    async def close(self):
        self.closed = True


def fixed(amount, peg_type="peggedUSD", label=None, bridged_from_chain=None):
    """A custom source returning a constant amount, tagged with a bridge label when given."""
    async def _fixed(api):
        balance = Balance()
        sum_single_balance(balance, peg_type, amount, label, False, bridged_from_chain)
        return balance
    return CustomSource(_fixed, f"fixed {amount}", peg_type)


def failing(error):
    async def _failing(api):
        raise error
    return CustomSource(_failing, "failing")


