"""Environment-driven configuration utilities for the MCP server."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

TRANSPORTS = ("stdio", "sse")


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    transport: str = "stdio"
    mcp_sse_host: str = "0.0.0.0"
    mcp_sse_port: int = 8000
    home_dir: Path | None = None

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so developers can rely on a local .env file without
        exporting variables globally.
        """
        load_dotenv()

        transport = os.getenv("MCP_TRANSPORT", "").strip().lower() or "stdio"
        if transport not in TRANSPORTS:
            raise ValueError(f"MCP_TRANSPORT must be one of: {', '.join(TRANSPORTS)}.")

        mcp_sse_host = os.getenv("MCP_SSE_HOST", "").strip() or "0.0.0.0"

        mcp_sse_port_raw = os.getenv("MCP_SSE_PORT", "").strip() or "8000"
        try:
            mcp_sse_port = int(mcp_sse_port_raw)
        except ValueError as exc:
            raise ValueError("MCP_SSE_PORT must be an integer.") from exc
        if mcp_sse_port <= 0:
            raise ValueError("MCP_SSE_PORT must be greater than zero.")

        home_dir_raw = os.getenv("CONFIG_HOME_DIR", "").strip()
        home_dir = Path(home_dir_raw) if home_dir_raw else None
        if home_dir is not None and not home_dir.is_absolute():
            raise ValueError("CONFIG_HOME_DIR must be an absolute path.")

        return cls(
            transport=transport,
            mcp_sse_host=mcp_sse_host,
            mcp_sse_port=mcp_sse_port,
            home_dir=home_dir,
        )
