"""Multi-chain blockchain RPC tools for the crypto analysis assistant."""

__version__ = "0.1.0"
