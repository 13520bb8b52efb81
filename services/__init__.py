"""
RecipeBox Services Module
Business logic and clients for external services
"""

from .ai_service import AIRankingClient
from .auth_service import AuthService
from .prompt_engineering import PromptTemplates, parse_ranked_ids, prompt_templates
from .storage_service import StorageClient, StorageError

__all__ = [
    # AI Service
    "AIRankingClient",

    # Prompt Engineering
    "PromptTemplates",
    "parse_ranked_ids",
    "prompt_templates",

    # Authentication
    "AuthService",

    # Object storage
    "StorageClient",
    "StorageError",
]
