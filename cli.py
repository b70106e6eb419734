#!/usr/bin/env python3
"""
Selection Sync CLI - inspect and reconcile the current assistant/topic selection
"""
import argparse
import logging
import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from selection_sync.logging_config import setup_logging, get_logger

logger = get_logger("cli")
console = Console()


def get_settings(args):
    """Load config, applying the --db override."""
    from selection_sync.config import Config

    config_path = args.config or os.getenv("SELECTION_SYNC_CONFIG")
    config = Config.load(Path(config_path) if config_path else None)
    if args.db:
        config.storage.backend = "sqlite"
        config.storage.db_path = args.db
    return config


def build_sync(config, store, container):
    """Wire the reconciler and driver for a store and container."""
    from selection_sync.capabilities import WorkspacePermissionChecker
    from selection_sync.provisioner import TemplateProvisioner
    from selection_sync.reconciler import Reconciler
    from selection_sync.sync_worker import SelectionSync

    reconciler = Reconciler(
        store,
        TemplateProvisioner(store, config.provisioning),
        setting_key=config.storage.current_assistant_key,
    )
    checker = None
    if config.sync.check_permissions:
        checker = WorkspacePermissionChecker(Path(config.sync.workspace_dir))
    return SelectionSync(container, reconciler, capability_checker=checker)


def print_selection(container, title: str = "Current selection"):
    """Print the selected assistant and topic."""
    assistant = container.current_assistant
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Assistant", f"{assistant.name} ({assistant.id})" if assistant else "-")
    topic_name = "-"
    if assistant and container.current_topic_id:
        for topic in assistant.topics or []:
            if topic.id == container.current_topic_id:
                topic_name = topic.name
                break
    table.add_row("Topic", f"{topic_name} ({container.current_topic_id or '-'})")
    console.print(table)


async def _list(config):
    from selection_sync.entity_loader import EntityLoader
    from selection_sync.storage import create_store

    async with create_store(config.storage) as store:
        loader = EntityLoader(store)
        current_id = await store.get_setting(config.storage.current_assistant_key)
        assistants = await store.list_assistants()
        if not assistants:
            console.print("No assistants yet. Run 'selection-sync seed' or 'selection-sync reconcile'.")
            return

        table = Table(title="Assistants")
        table.add_column("", width=1)
        table.add_column("Assistant")
        table.add_column("Id")
        table.add_column("Topics (most recent first)")
        for assistant in assistants:
            hydrated = await loader.hydrate(assistant)
            topics = ", ".join(f"{t.name} ({t.id})" for t in hydrated.topics) or "-"
            marker = "*" if assistant.id == current_id else ""
            table.add_row(marker, assistant.name, assistant.id, topics)
        console.print(table)


def cmd_list(args, config):
    """List assistants and their topics."""
    asyncio.run(_list(config))


async def _reconcile(config, assistant_id: Optional[str] = None, topic_id: Optional[str] = None):
    from selection_sync.entity_loader import EntityLoader
    from selection_sync.selection_state import SelectionStateContainer
    from selection_sync.storage import create_store

    async with create_store(config.storage) as store:
        container = SelectionStateContainer(assistants=await store.list_assistants())
        if assistant_id:
            assistant = await EntityLoader(store).load_assistant(assistant_id)
            if assistant is None:
                console.print(f"Assistant not found: {assistant_id}")
                return None
            container.set_current_assistant(assistant)
        if topic_id:
            container.set_current_topic_id(topic_id)

        sync = build_sync(config, store, container)
        await sync.run_until_settled()
        print_selection(container)

        stats = sync.status_tracker.stats
        logger.info("%d pass(es), %d effect(s), %d failed",
                    stats.passes, stats.effects_applied, stats.failed_passes)
        if stats.failed_passes:
            console.print(f"[red]Reconciliation failed:[/red] {escape(stats.last_error or '')}")
        return container


def cmd_reconcile(args, config):
    """Restore the selection from storage and reconcile it."""
    asyncio.run(_reconcile(config))


def cmd_select(args, config):
    """Select a topic as a user would, then reconcile. The persisted pointer is left as is."""
    asyncio.run(_reconcile(config, args.assistant, args.topic_id))


async def _seed(config):
    from selection_sync.provisioner import TemplateProvisioner
    from selection_sync.storage import create_store

    async with create_store(config.storage) as store:
        if await store.list_assistants():
            console.print("Store already has assistants, nothing to seed.")
            return
        created = await TemplateProvisioner(store, config.provisioning).initialize_default_assistants()
        for assistant in created:
            console.print(f"Created {assistant.name} ({assistant.id}) with {len(assistant.topic_ids)} topic(s)")


def cmd_seed(args, config):
    """Create default assistants in an empty store."""
    asyncio.run(_seed(config))


def main():
    parser = argparse.ArgumentParser(
        prog="selection-sync",
        description="Selection Sync - keep the current assistant and topic consistent"
    )
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--db", help="SQLite database path (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List assistants and topics")
    list_parser.set_defaults(func=cmd_list)

    reconcile_parser = subparsers.add_parser("reconcile", help="Reconcile the current selection")
    reconcile_parser.set_defaults(func=cmd_reconcile)

    select_parser = subparsers.add_parser("select", help="Select a topic, then reconcile")
    select_parser.add_argument("topic_id", help="Topic id to select")
    select_parser.add_argument("-a", "--assistant", help="Assistant id to select first")
    select_parser.set_defaults(func=cmd_select)

    seed_parser = subparsers.add_parser("seed", help="Create default assistants")
    seed_parser.set_defaults(func=cmd_seed)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = get_settings(args)
    log_file = Path(config.logging.file) if config.logging.file else None
    setup_logging(logging.DEBUG if args.verbose else config.logging.level, log_file)
    args.func(args, config)


if __name__ == "__main__":
    main()
