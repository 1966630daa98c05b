"""FastAPI application exposing detection, extraction and ranking."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from tothepoint import __version__
from tothepoint.analyzer import analyze_document
from tothepoint.config import MAX_MATCHES_LIMIT, AppConfig, ExtractionConfig, RankingConfig
from tothepoint.detection import classify_document
from tothepoint.dom.soup import SoupAccessor
from tothepoint.extraction.blocks import normalize_blocks
from tothepoint.extraction.pipeline import extract_article_body
from tothepoint.models import Block, BlockKind
from tothepoint.ranking.ranker import rank_title_against_blocks

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="tothepoint", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class DocumentPayload(BaseModel):
    html: str
    linked_data: Optional[List[Any]] = None


class ExtractPayload(DocumentPayload):
    min_body_chars: Optional[int] = None
    min_blocks: Optional[int] = None


class BlockPayload(BaseModel):
    text: str
    kind: BlockKind = BlockKind.PARAGRAPH
    level: Optional[int] = Field(default=None, ge=2, le=6)


class RankPayload(BaseModel):
    title: str
    blocks: List[BlockPayload]
    max_matches: Optional[int] = None


class AnalyzePayload(BaseModel):
    html: str
    title: Optional[str] = None


def _accessor_for(html: str) -> SoupAccessor:
    if not html.strip():
        raise HTTPException(status_code=400, detail="Empty document")
    return SoupAccessor.from_html(html)


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/detect")
def detect(payload: DocumentPayload) -> dict[str, Any]:
    accessor = _accessor_for(payload.html)
    return dataclasses.asdict(classify_document(accessor, payload.linked_data))


@app.post("/extract")
def extract(payload: ExtractPayload) -> dict[str, Any]:
    accessor = _accessor_for(payload.html)
    config = ExtractionConfig()
    if payload.min_body_chars is not None:
        config.min_body_chars = payload.min_body_chars
    if payload.min_blocks is not None:
        config.min_blocks = payload.min_blocks
    return dataclasses.asdict(extract_article_body(accessor, payload.linked_data, config=config))


@app.post("/rank")
def rank(payload: RankPayload) -> dict[str, Any]:
    blocks = normalize_blocks(
        Block(index=position, text=item.text, kind=item.kind, level=item.level)
        for position, item in enumerate(payload.blocks)
    )
    if not blocks:
        raise HTTPException(status_code=400, detail="No blocks provided")

    max_matches = RankingConfig().max_matches
    if payload.max_matches is not None:
        max_matches = max(1, min(payload.max_matches, MAX_MATCHES_LIMIT))
    result = rank_title_against_blocks(payload.title, blocks, config=RankingConfig(max_matches=max_matches))
    return dataclasses.asdict(result)


@app.post("/analyze")
def analyze(payload: AnalyzePayload) -> dict[str, Any]:
    accessor = _accessor_for(payload.html)
    analysis = analyze_document(accessor, payload.title, config=AppConfig())
    LOGGER.info(
        "Analyzed document: source=%s matches=%d",
        analysis.extraction.source.value,
        len(analysis.ranking.matches) if analysis.ranking else 0,
    )
    return dataclasses.asdict(analysis)
