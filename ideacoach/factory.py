"""
Factory for creating service instances and pipelines.
"""

from typing import Optional

import httpx

from ideacoach.pipeline import CoachingPipeline
from ideacoach.services.context_builder import PromptContextBuilder
from ideacoach.services.fallback_service import FallbackService
from ideacoach.services.gemini_service import GeminiService
from ideacoach.services.prompt_templates import PromptTemplateEngine
from ideacoach.utils.config import config

def create_pipeline(api_key: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
    """
    Build a CoachingPipeline wired to the Gemini service from configuration.

    Args:
        api_key: Overrides GOOGLE_AI_API_KEY when given
        transport: Optional httpx transport for the Gemini service

    Returns:
        CoachingPipeline instance
    """
    ai_service = GeminiService(
        api_key=api_key or config.google_ai_api_key,
        model=config.google_ai_model,
        base_url=config.google_ai_base_url,
        connect_timeout=config.connect_timeout,
        transfer_timeout=config.transfer_timeout,
        transport=transport,
    )

    return CoachingPipeline(
        ai_service=ai_service,
        template_engine=PromptTemplateEngine(PromptContextBuilder()),
        fallback_service=FallbackService(),
    )
