"""
RecipeBox AI Service Client
Asks an Ollama-hosted model to rank recipe search results
"""

from typing import List, Optional, Sequence
import time
import structlog
import httpx

from core.config import Settings
from schemas.recipe_schemas import RankingCandidate
from services.prompt_engineering import parse_ranked_ids, prompt_templates

logger = structlog.get_logger()


class AIRankingClient:
    """
    Client for the Ollama chat API.

    Ranking is an optional enrichment: every failure is logged and reported
    as ``None`` instead of raising.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.OLLAMA_URL
        self.model = settings.OLLAMA_MODEL
        self.enabled = settings.AI_RANKING_ENABLED
        self.client = httpx.AsyncClient(timeout=settings.AI_RANKING_TIMEOUT, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def chat(self, prompt: str) -> str:
        """Send a single user message and return the reply text"""
        response = await self.client.post(
            f"{self.base_url}/api/chat",
            json={
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "stream": False,
            },
        )
        response.raise_for_status()

        content = response.json()["message"]["content"]
        if not isinstance(content, str):
            raise TypeError(f"Reply content is {type(content).__name__}, not text")
        return content

    async def rank_recipes(
        self,
        terms: Sequence[str],
        candidates: Sequence[RankingCandidate],
    ) -> Optional[List[str]]:
        """Return recipe ids ordered by relevance, or None if ranking failed"""
        if not self.enabled:
            return None

        prompt = prompt_templates.build_ranking_prompt(terms, candidates)
        start_time = time.time()

        try:
            content = await self.chat(prompt)
        except httpx.HTTPStatusError as e:
            logger.warning("AI ranking returned error", status=e.response.status_code)
            return None
        except httpx.HTTPError as e:
            logger.warning("AI ranking request failed", error=str(e), error_type=type(e).__name__)
            return None
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("AI ranking reply malformed", error=str(e))
            return None

        ranked = parse_ranked_ids(content)
        if ranked is None:
            logger.warning("AI ranking failed, returning DB matches directly")
            return None

        logger.info(
            "AI ranking completed",
            model=self.model,
            candidates=len(candidates),
            ranked=len(ranked),
            duration=round(time.time() - start_time, 3),
        )
        return ranked
