"""Domain value objects for the dust-sweep scanner.

- EvmAddress / SolanaAddress: validated wallet addresses
- OriginPolicy: cross-origin allow-list
"""

from app.dustsweep.domain.value_objects.origin_policy import OriginPolicy
from app.dustsweep.domain.value_objects.wallet_address import EvmAddress, SolanaAddress

__all__ = ["EvmAddress", "OriginPolicy", "SolanaAddress"]
