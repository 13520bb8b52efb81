"""
RecipeBox Prompt Engineering
Prompt template for ranking search results and parsing of the model's reply
"""

import json
import re
from typing import List, Optional, Sequence
import structlog

from schemas.recipe_schemas import RankingCandidate

logger = structlog.get_logger()

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


class PromptTemplates:
    """Prompt templates for AI operations"""

    ranking_template = (
        'The user searched for: "{query}".\n'
        "Here are possible recipes:\n"
        "{candidates}\n"
        "\n"
        "Task:\n"
        "- Rank the recipes from most relevant to least relevant.\n"
        "- Return ONLY an array of recipe IDs in JSON.\n"
        'Example: ["65d8f2...", "65d8f3..."]'
    )

    def build_ranking_prompt(self, terms: Sequence[str], candidates: Sequence[RankingCandidate]) -> str:
        candidate_json = json.dumps(
            [c.model_dump(mode="json") for c in candidates],
            indent=2,
        )
        return self.ranking_template.format(query=", ".join(terms), candidates=candidate_json)


def parse_ranked_ids(content: Optional[str]) -> Optional[List[str]]:
    """
    Parse the model's reply into a list of recipe ids.

    Returns None when the reply is not a JSON array, so callers can fall back
    to the unranked results.
    """
    if not isinstance(content, str):
        return None

    text = content.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        logger.debug("Ranking reply is not JSON", reply=text[:200])
        return None

    if not isinstance(parsed, list):
        return None

    return [str(item) for item in parsed if isinstance(item, (str, int))]


prompt_templates = PromptTemplates()
