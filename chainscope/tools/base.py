"""Base classes for blockchain tools integration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class ToolResult:
    """Standardized tool result format for all crypto tools."""

    source: str  # Tool source (e.g., "x402labs")
    timestamp: str  # ISO 8601 timestamp
    success: bool  # Whether the call succeeded
    data: dict = field(default_factory=dict)  # Structured data
    error: Optional[str] = None  # Error message if failed

    @staticmethod
    def _format_timestamp() -> str:
        """Return current UTC timestamp in ISO 8601 format."""
        return datetime.now(timezone.utc).isoformat()

    @classmethod
    def ok(cls, source: str, data: dict) -> "ToolResult":
        return cls(
            source=source,
            timestamp=cls._format_timestamp(),
            success=True,
            data=data,
        )

    @classmethod
    def failed(cls, source: str, error: str, data: Optional[dict] = None) -> "ToolResult":
        return cls(
            source=source,
            timestamp=cls._format_timestamp(),
            success=False,
            data=data or {},
            error=error,
        )

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "timestamp": self.timestamp,
            "success": self.success,
            "data": self.data,
            "error": self.error,
        }


class BaseTool(ABC):
    """Abstract base class for all tools."""

    def __init__(self, config):
        self._config = config
        self._timeout = float(getattr(config, "RPC_TIMEOUT_SECONDS", 10))

    @abstractmethod
    async def fetch(self, **kwargs):
        """Fetch data from the tool backend."""
        pass
