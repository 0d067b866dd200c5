"""Catalog API

Read-only queries over the built-in dictionaries.
"""
from fastapi import APIRouter, Query

from engines.pool import get_all_topics, get_topic_word_count
from languages.german.catalog import BUILT_IN_LEVELS, built_in_dictionaries

router = APIRouter()


@router.get("/topics")
async def list_topics():
    return {"topics": get_all_topics()}


@router.get("/topic-counts")
async def topic_counts(enabled: list[str] = Query(default=["A1"])):
    """Word count per topic for the given enabled dictionaries."""
    return {
        "enabled": enabled,
        "counts": {topic: get_topic_word_count(topic, enabled) for topic in get_all_topics()},
    }


@router.get("/dictionaries")
async def list_dictionaries():
    dictionaries = built_in_dictionaries()
    return [{"id": level, "size": len(dictionaries[level])} for level in BUILT_IN_LEVELS]
