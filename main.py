"""Entry point for the AI apps config MCP server."""

import logging
import os

from appconfig_mcp.server import build_server
from appconfig_mcp.settings import Settings


def _configure_logging() -> None:
    # basicConfig writes to stderr, which keeps stdout free for the stdio transport.
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    """Bootstrap and run the server."""
    _configure_logging()
    logger = logging.getLogger("appconfig-mcp")
    settings = Settings.load()
    server = build_server(settings)

    try:
        server.startup()
        if settings.transport == "sse":
            logger.info(
                "MCP SSE server ready at http://localhost:%s/sse",
                settings.mcp_sse_port,
            )
        else:
            logger.info("AI Apps Config MCP server running on stdio")
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutdown requested (Ctrl+C).")
    except Exception:
        logger.exception("Server stopped due to an unexpected error.")
        raise
    finally:
        server.shutdown()
        logger.info("Server shutdown complete.")


if __name__ == "__main__":
    main()
