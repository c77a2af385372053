"""
Abstract base class for generative-language services used in ideacoach.
This provides a common interface so the pipeline can run against fakes in tests.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ideacoach.models.prompt import GenerationConfig

class AIService(ABC):
    """Abstract base class for AI services."""

    @abstractmethod
    async def generate_text(self, prompt: str, generation_config: Optional[GenerationConfig] = None) -> str:
        """
        Send one prompt to the provider and return its raw text output.

        Args:
            prompt: The final rendered prompt
            generation_config: Optional sampling parameters

        Returns:
            The text of the first candidate's first content part

        Raises:
            AIServiceError: For every failure; implementations never retry
        """
        pass
