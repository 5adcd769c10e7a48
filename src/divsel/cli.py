"""Command-line interface for divsel."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
import numpy as np

from divsel import __version__
from divsel.config import (
    CONFIG_FILE,
    ProjectConfig,
    find_project_root,
    get_divsel_dir,
    load_config,
    save_config,
    set_config_value,
)
from divsel.exceptions import DivselError
from divsel.selection.engine import DiversitySelector
from divsel.selection.similarity import DenseCosineBuilder
from divsel.ui.console import Console

console = Console()


def _load_project(path: str | None) -> tuple[Path | None, ProjectConfig]:
    """Find the project root (if any) and its config, falling back to defaults."""
    start = Path(path).resolve() if path else None
    if start is not None and not start.exists():
        console.error(f"Path does not exist: {path}")
        sys.exit(1)
    root = find_project_root(start)
    if root is None:
        return None, ProjectConfig()
    try:
        return root, load_config(root)
    except DivselError as e:
        console.error(str(e))
        sys.exit(1)


def _load_embeddings(file: str) -> list[np.ndarray] | np.ndarray:
    """Read embeddings from a .npy file or a JSON document.

    JSON may be a plain array of vectors or an embeddings API response of the
    form {"data": [{"embedding": [...]}, ...]}.
    """
    path = Path(file)
    if path.suffix == ".npy":
        try:
            vectors = np.load(path)
        except (ValueError, OSError) as e:
            console.error(f"Could not load {file}: {e}")
            sys.exit(1)
        if vectors.ndim != 2 or not np.issubdtype(vectors.dtype, np.number):
            console.error(f"Expected a 2-D numeric array in {file}")
            sys.exit(1)
        return vectors

    try:
        data = json.loads(path.read_text())
    except ValueError as e:
        console.error(f"Could not parse {file}: {e}")
        sys.exit(1)

    if isinstance(data, dict) and isinstance(data.get("data"), list):
        data = [
            entry.get("embedding") if isinstance(entry, dict) else None
            for entry in data["data"]
        ]
    if not isinstance(data, list) or not all(isinstance(v, list) for v in data):
        console.error(f"{file} does not contain a list of embedding vectors")
        sys.exit(1)
    try:
        return [np.asarray(v, dtype=np.float64) for v in data]
    except (ValueError, TypeError) as e:
        console.error(f"Non-numeric embedding values in {file}: {e}")
        sys.exit(1)


def _make_selector(config: ProjectConfig, threshold: float | None) -> DiversitySelector:
    builder = DenseCosineBuilder(strict=config.selection.strict_dimensions)
    if threshold is None:
        threshold = config.selection.threshold
    return DiversitySelector(builder, threshold=threshold)


@click.group()
@click.version_option(version=__version__, prog_name="divsel")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(verbose: bool):
    """divsel - pick the most diverse subset of an embedding set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[console.logging_handler()],
        force=True,
    )


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
def init(path: str | None):
    """Create a .divsel/config.json with default settings."""
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(1)

    console.banner()
    console.info(f"Initializing divsel in: {root}")
    config = ProjectConfig(name=root.name)
    if (get_divsel_dir(root) / CONFIG_FILE).exists():
        console.warning("Configuration already exists, leaving it unchanged")
        return
    save_config(root, config)
    console.success(f"Configuration saved to {get_divsel_dir(root) / CONFIG_FILE}")


@main.command()
@click.argument("embeddings", type=click.Path(exists=True, dir_okay=False))
@click.option("-k", "k", type=int, default=None, help="Number of items to select.")
@click.option("--threshold", "-t", type=float, default=None,
              help="Saturation threshold when -k is not given.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--path", "-p", default=None, help="Path to the project root.")
def select(embeddings: str, k: int | None, threshold: float | None,
           as_json: bool, path: str | None):
    """Select a diverse subset of EMBEDDINGS (JSON or .npy)."""
    _, config = _load_project(path)
    vectors = _load_embeddings(embeddings)
    selector = _make_selector(config, threshold)

    try:
        if k is not None:
            result = selector.run_fixed_k(vectors, k)
        else:
            result = selector.select_by_saturation(vectors)
    except DivselError as e:
        console.error(str(e))
        sys.exit(1)

    if as_json or config.output.format == "json":
        click.echo(json.dumps(result.model_dump(), indent=2))
        return
    console.show_selection(result, show_trajectory=config.output.show_trajectory)


@main.command()
@click.argument("items", type=click.Path(exists=True, dir_okay=False))
@click.argument("embeddings", type=click.Path(exists=True, dir_okay=False))
@click.option("-k", "k", type=int, default=None, help="Number of items to keep.")
@click.option("--threshold", "-t", type=float, default=None,
              help="Saturation threshold when -k is not given.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--path", "-p", default=None, help="Path to the project root.")
def dedup(items: str, embeddings: str, k: int | None, threshold: float | None,
          as_json: bool, path: str | None):
    """Keep the most distinct entries of ITEMS (a JSON array of strings)."""
    from divsel.dedup import deduplicate

    _, config = _load_project(path)
    try:
        texts = json.loads(Path(items).read_text())
    except json.JSONDecodeError as e:
        console.error(f"Could not parse {items}: {e}")
        sys.exit(1)
    if not isinstance(texts, list) or not all(isinstance(t, str) for t in texts):
        console.error(f"{items} does not contain a list of strings")
        sys.exit(1)

    vectors = _load_embeddings(embeddings)
    selector = _make_selector(config, threshold)

    try:
        result = deduplicate(
            texts, vectors, k=k, threshold=selector.threshold, selector=selector
        )
    except DivselError as e:
        console.error(str(e))
        sys.exit(1)

    if as_json or config.output.format == "json":
        click.echo(json.dumps([kept.model_dump() for kept in result.items], indent=2))
        return
    console.show_dedup(result)


# =========================================================================
# Config Management
# =========================================================================

@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage divsel configuration."""
    root, config = _load_project(path)
    if root is None:
        console.error(
            "No divsel project found. Run 'divsel init' first, "
            "or specify a path with --path."
        )
        sys.exit(1)

    if action == "show":
        console.console.print_json(json.dumps(config.model_dump(), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: divsel config get <key>")
            sys.exit(1)
        data = config.model_dump()
        for part in key.split("."):
            if isinstance(data, dict) and part in data:
                data = data[part]
            else:
                console.error(f"Unknown key: {key}")
                sys.exit(1)
        console.console.print(f"{key} = {data}")
    elif action == "set":
        if not key or value is None:
            console.error("Usage: divsel config set <key> <value>")
            sys.exit(1)
        # Try to parse as JSON for non-string values
        try:
            parsed_value = json.loads(value)
        except json.JSONDecodeError:
            parsed_value = value
        try:
            config = set_config_value(config, key, parsed_value)
        except DivselError as e:
            console.error(str(e))
            sys.exit(1)
        save_config(root, config)
        console.success(f"Set {key} = {parsed_value}")


if __name__ == "__main__":
    main()
