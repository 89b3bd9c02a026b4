"""Interface de linha de comando para operar o Mirante."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from mirante.container import Container, build_container
from mirante.domain import MiranteError
from mirante.settings import AppSettings, get_log_level


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Mirante - agregador de notícias sobre justiça climática"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Nível de log (DEBUG, INFO, WARNING...). Padrão: MIRANTE_LOG_LEVEL ou INFO",
    )
    # Aceita --log-level também depois do subcomando.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", default=argparse.SUPPRESS, help=argparse.SUPPRESS)
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "serve", parents=[common], help="Inicia a API HTTP com o Uvicorn"
    )
    subparsers.add_parser(
        "collect",
        parents=[common],
        help="Executa uma passada do coletor por todas as regiões",
    )
    subparsers.add_parser(
        "stats", parents=[common], help="Mostra as estatísticas do dataset histórico"
    )
    return parser.parse_args(argv)


def _dataset_container(settings: AppSettings) -> Container:
    settings = dataclasses.replace(
        settings, dataset_enabled=True, collector_enabled=False, curation_enabled=False
    )
    return build_container(settings)


async def _collect(container: Container) -> dict:
    try:
        result = await container.dataset.collector_job.run_once()
    finally:
        await container.aclose()
    return result.to_mapping() if result is not None else {}


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)
    console = Console()
    level_name = args.log_level or get_log_level()
    handler = RichHandler(console=console, markup=True, rich_tracebacks=True)
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logger = logging.getLogger("mirante.cli")

    if args.command == "serve":
        from mirante.api import run

        run()
        return

    settings = AppSettings.from_env()
    if args.command == "collect":
        if not settings.newsapi_key:
            console.print("[red]NEWSAPI_KEY não configurada; coleta cancelada.[/red]")
            sys.exit(1)
        summary = asyncio.run(_collect(_dataset_container(settings)))
        console.print_json(data=summary)
        if summary.get("errors"):
            logger.warning("Coleta concluída com %d erros", len(summary["errors"]))
    elif args.command == "stats":
        container = _dataset_container(settings)
        try:
            stats = container.dataset.repository.stats()
        except MiranteError as exc:
            console.print(f"[red]{exc}[/red]")
            sys.exit(1)
        finally:
            if container.mongo_factory is not None:
                container.mongo_factory.close()
        console.print_json(data=stats.to_mapping())


if __name__ == "__main__":  # pragma: no cover
    main()
