"""Chat model construction and response helpers shared by the AI collaborators."""

from __future__ import annotations

import asyncio
import json
import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from chronosec.config import settings

logger = logging.getLogger("chronosec.ai")


def build_llm() -> BaseChatModel | None:
    """Chat model for the configured provider, or None when no API key is set."""
    if settings.llm_provider == "anthropic":
        if not settings.anthropic_api_key:
            return None
        from langchain_anthropic import ChatAnthropic
        return ChatAnthropic(
            model=settings.llm_model,
            api_key=settings.anthropic_api_key,
            temperature=settings.llm_temperature,
            max_tokens=4096,
        )
    elif settings.llm_provider == "openai":
        if not settings.openai_api_key:
            return None
        from langchain_openai import ChatOpenAI
        return ChatOpenAI(
            model=settings.llm_model,
            api_key=settings.openai_api_key,
            temperature=settings.llm_temperature,
        )
    else:
        raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")


async def ask(llm: BaseChatModel, system_prompt: str, user_content: str) -> str:
    """Send one system+user exchange and return the stripped response text."""
    response = await asyncio.wait_for(
        llm.ainvoke([
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_content),
        ]),
        timeout=settings.llm_timeout_seconds,
    )
    return response.content.strip()


def parse_json(raw: str):
    """Decode a JSON reply, tolerating a surrounding Markdown code fence."""
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1].rsplit("```", 1)[0]
    return json.loads(raw)
