"""Command line interface for tothepoint."""

from __future__ import annotations

import dataclasses
import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from tothepoint.analyzer import analyze_document
from tothepoint.config import MAX_MATCHES_LIMIT, AppConfig, ExtractionConfig, RankingConfig
from tothepoint.detection import classify_document
from tothepoint.dom.accessor import DocumentAccessor
from tothepoint.dom.soup import SoupAccessor
from tothepoint.extraction.blocks import normalize_blocks
from tothepoint.extraction.pipeline import extract_article_body
from tothepoint.models import Block, BlockKind, RankingResult
from tothepoint.ranking.ranker import rank_title_against_blocks
from tothepoint.web.app import app as web_app

console = Console()
app = typer.Typer(help="tothepoint - jump to the part of an article that matches its title")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_html(url: str, timeout: float) -> str:
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.text
    except httpx.HTTPError as exc:
        raise typer.BadParameter(f"Unable to fetch {url}: {exc}") from exc


def _read_source(source: str, timeout: float) -> str:
    if _is_url(source):
        return _fetch_html(source, timeout)
    path = Path(source).expanduser()
    if not path.is_file():
        raise typer.BadParameter(f"File not found: {path}")
    return path.read_text(encoding="utf-8", errors="replace")


@contextmanager
def _open_document(source: str, *, render: bool, timeout: float) -> Iterator[DocumentAccessor]:
    if not render:
        yield SoupAccessor.from_html(_read_source(source, timeout))
        return

    try:
        from playwright.sync_api import sync_playwright
    except ImportError as exc:  # pragma: no cover - optional extra
        raise typer.BadParameter(
            "playwright is not installed. Install the browser extras with \"python -m pip install '.[browser]'\""
        ) from exc

    from tothepoint.dom.live import PlaywrightAccessor

    url = source if _is_url(source) else Path(source).expanduser().resolve().as_uri()
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch()
        try:
            page = browser.new_page()
            page.goto(url, timeout=timeout * 1000, wait_until="domcontentloaded")
            yield PlaywrightAccessor(page)
        finally:
            browser.close()


def _print_json(value: Any) -> None:
    console.print_json(json.dumps(dataclasses.asdict(value), default=str))


def _load_blocks(path: Path) -> List[Block]:
    """Read a JSON list of ``{"text", "kind", "level"}`` objects."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"Invalid block file {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise typer.BadParameter(f"Invalid block file {path}: expected a JSON list")

    blocks = []
    for item in payload:
        if not isinstance(item, dict) or not str(item.get("text", "")).strip():
            continue
        try:
            kind = BlockKind(item.get("kind", BlockKind.PARAGRAPH.value))
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid block kind in {path}: {item.get('kind')}") from exc
        blocks.append(Block(index=len(blocks), text=str(item["text"]), kind=kind, level=item.get("level")))
    return normalize_blocks(blocks)


def _print_matches(result: RankingResult) -> None:
    if not result.matches:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Blocks")
    table.add_column("Snippet")
    for match in result.matches:
        table.add_row(f"{match.score:.4f}", f"{match.start_block_index}-{match.end_block_index}", match.snippet)
    console.print(table)


@app.command()
def detect(
    source: str = typer.Argument(..., help="HTML file path or http(s) URL"),
    render: bool = typer.Option(False, "--render", help="Load the page in a headless browser"),
    timeout: float = typer.Option(AppConfig().fetch_timeout, help="Fetch timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Decide whether a page is an article and resolve its title."""
    _setup_logging(verbose)
    with _open_document(source, render=render, timeout=timeout) as accessor:
        detection = classify_document(accessor)

    if as_json:
        _print_json(detection)
        return
    verdict = "[green]article[/green]" if detection.is_article else "[yellow]not an article[/yellow]"
    console.print(f"Verdict: {verdict}")
    console.print(f"Title: {detection.title or '-'} ({detection.title_source.value if detection.title_source else '-'})")
    console.print(f"Reasons: {', '.join(detection.reasons) or '-'}")


@app.command()
def extract(
    source: str = typer.Argument(..., help="HTML file path or http(s) URL"),
    min_body_chars: int = typer.Option(ExtractionConfig().min_body_chars, help="Minimum body length"),
    min_blocks: int = typer.Option(ExtractionConfig().min_blocks, help="Minimum number of blocks"),
    render: bool = typer.Option(False, "--render", help="Load the page in a headless browser"),
    timeout: float = typer.Option(AppConfig().fetch_timeout, help="Fetch timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Extract the article body of a page."""
    _setup_logging(verbose)
    config = ExtractionConfig(min_body_chars=min_body_chars, min_blocks=min_blocks)
    with _open_document(source, render=render, timeout=timeout) as accessor:
        extraction = extract_article_body(accessor, config=config)

    if as_json:
        _print_json(extraction)
        return
    if not extraction.found:
        console.print("[yellow]No article body found.[/yellow]")
        return
    console.print(f"Source: [bold]{extraction.source.value}[/bold] ({len(extraction.blocks)} blocks)")
    console.print(extraction.body_text, markup=False)


@app.command()
def rank(
    source: str = typer.Argument(..., help="HTML file, http(s) URL or JSON block list"),
    title: str = typer.Option(..., "--title", "-t", help="Title to rank passages against"),
    max_matches: int = typer.Option(
        RankingConfig().max_matches, min=1, max=MAX_MATCHES_LIMIT, clamp=True, help="Maximum number of matches"
    ),
    render: bool = typer.Option(False, "--render", help="Load the page in a headless browser"),
    timeout: float = typer.Option(AppConfig().fetch_timeout, help="Fetch timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rank passages of a page (or a block list) against a title."""
    _setup_logging(verbose)
    config = RankingConfig(max_matches=max_matches)

    if not _is_url(source) and source.lower().endswith(".json"):
        blocks = _load_blocks(Path(source).expanduser())
    else:
        with _open_document(source, render=render, timeout=timeout) as accessor:
            blocks = extract_article_body(accessor).blocks

    result = rank_title_against_blocks(title, blocks, config=config)
    if as_json:
        _print_json(result)
        return
    console.print(f"Ranked {result.chunk_count} chunks for {result.query_token_count} query tokens")
    _print_matches(result)


@app.command()
def analyze(
    source: str = typer.Argument(..., help="HTML file path or http(s) URL"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Override the detected title"),
    render: bool = typer.Option(False, "--render", help="Load the page in a headless browser"),
    timeout: float = typer.Option(AppConfig().fetch_timeout, help="Fetch timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Detect, extract and rank in one pass."""
    _setup_logging(verbose)
    config = AppConfig(fetch_timeout=timeout)
    with _open_document(source, render=render, timeout=timeout) as accessor:
        analysis = analyze_document(accessor, title, config=config)

    if as_json:
        _print_json(analysis)
        return
    console.print(f"Article: {analysis.detection.is_article}  Title: {analysis.title or '-'}")
    console.print(f"Body: {analysis.extraction.source.value} ({len(analysis.extraction.blocks)} blocks)")
    if analysis.ranking is None:
        console.print("[yellow]Nothing to rank.[/yellow]")
        return
    _print_matches(analysis.ranking)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional extra
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting API on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
