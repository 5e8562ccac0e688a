"""Multi-chain dust token discovery."""
