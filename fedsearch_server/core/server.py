import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from dp.agent.server import CalculationMCPServer

from .config import SearchConfig, load_config, load_env
from .error import ConfigurationError, EmptyQueryError, log_error
from .logger import SERVER_LIBRARY_LOGGERS, dated_log_file, setup_logger
from .pipeline import SearchPipeline
from ..models.schema import SearchResponse

load_env()

# Keys whose values should be masked when printing env
_ENV_MASK_KEYS = frozenset({
    "EUROPEANA_API_KEY",
})

_ENV_KEYS = [
    "DATAMUSE_API_URL", "DATAMUSE_MAX_RESULTS", "EXPANSION_TIMEOUT",
    "EUROPEANA_API_URL", "EUROPEANA_API_KEY", "EUROPEANA_ROWS",
    "PLOS_API_URL", "PLOS_ROWS", "PLOS_FIELDS",
    "PROVIDER_TIMEOUT", "FEDSEARCH_LOG_DIR",
]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Federated Search MCP Server")
    parser.add_argument("--port", type=int, default=50001, help="Server port (default: 50001)")
    parser.add_argument("--host", default="0.0.0.0", help="Server host (default: 0.0.0.0)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path (default: ./fedsearch_YYYYMMDD.log)",
    )
    parser.add_argument(
        "--transport",
        default="sse",
        choices=["sse", "streamable-http"],
        help="MCP transport (default: sse)",
    )
    return parser.parse_args(argv)


def print_startup_env() -> None:
    """
    Print relevant environment variables at server startup.
    Masks sensitive values (API keys).
    """
    print("=== Federated search server env ===")
    for k in _ENV_KEYS:
        v = os.getenv(k)
        if v is None or v == "":
            print(f"  {k}= (unset)")
        elif k in _ENV_MASK_KEYS:
            print(f"  {k}= *** (set)")
        else:
            print(f"  {k}= {v}")
    print("===================================")


def create_server(config: SearchConfig, host: str, port: int) -> CalculationMCPServer:
    """
    Build the MCP server with the `federated_search` tool bound to `config`.
    """
    mcp = CalculationMCPServer("FederatedSearchServer", port=port, host=host)
    pipeline = SearchPipeline(config)

    @mcp.tool()
    async def federated_search(query: str) -> SearchResponse:
        """
        Search Europeana and PLOS at once with a synonym-expanded query.

        Each word of the query is expanded with related words (DataMuse);
        the expanded query is sent to every provider in parallel and the hits
        are merged into one list sorted by normalized relevance (0-1).

        Args:
            query: Free-text query, e.g. "ancient pottery"

        Returns:
            query, query_used (boolean query sent to providers), n_found,
            by_source (hits per provider), errors (failed providers), results
        """
        try:
            return await pipeline.search_report(query)
        except EmptyQueryError as e:
            log_error(e, level="WARNING")
            return {
                "query": query or "",
                "query_used": "",
                "n_found": 0,
                "by_source": {},
                "errors": {"query": e.to_dict()["message"]},
                "results": [],
            }

    return mcp


def main(argv=None) -> None:
    args = parse_args(argv)
    log_file: Optional[Path] = Path(args.log_file) if args.log_file else dated_log_file()
    logger = setup_logger(
        name="fedsearch_server",
        level=args.log_level,
        log_file=log_file,
        bind=SERVER_LIBRARY_LOGGERS,
    )
    logger.info(f"Log file: {log_file.resolve()}")

    try:
        config = load_config()
    except ConfigurationError as e:
        log_error(e, logger, level="CRITICAL")
        sys.exit(1)

    print_startup_env()
    mcp = create_server(config, host=args.host, port=args.port)
    logger.info("Starting Federated Search MCP Server...")
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
