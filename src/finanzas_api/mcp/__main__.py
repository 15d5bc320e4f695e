#!/usr/bin/env python3
"""
Script para ejecutar el servidor MCP de la API de finanzas.

Uso:
    python -m finanzas_api.mcp          # stdio, para clientes MCP
    python -m finanzas_api.mcp --http   # fachada HTTP en MCP_PORT (3031)

    O como script:
    finanzas-mcp [--http]
"""

import argparse
import asyncio


def main() -> None:
    """Entry point para el servidor MCP."""
    parser = argparse.ArgumentParser(description="Servidor MCP de la API de finanzas")
    parser.add_argument("--http", action="store_true", help="Servir la fachada HTTP")
    args = parser.parse_args()

    if args.http:
        from finanzas_api.mcp.server import main as serve_http

        serve_http()
        return

    from finanzas_api.mcp.stdio import run_server

    asyncio.run(run_server())


if __name__ == "__main__":
    main()
