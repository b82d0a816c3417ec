"""
IMAGE GENERATOR v1.0
====================
Prompt list -> image URL list through the OpenAI Images API.

One URL per prompt, in prompt order. Any failure raises
ImageGenerationError; the pipeline treats it as a soft failure and publishes
the article without images.
"""

import logging
from typing import List

import openai

from article_config import OPENAI_API_KEY, IMAGE_MODEL, IMAGE_SIZE

logger = logging.getLogger(__name__)


class ImageGenerationError(Exception):
    """Raised when an image cannot be generated."""


class ImageGenerator:
    def __init__(self, api_key: str = OPENAI_API_KEY, model: str = IMAGE_MODEL, size: str = IMAGE_SIZE):
        self.api_key = api_key
        self.model = model
        self.size = size
        self._client = None

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> openai.OpenAI:
        if self._client is None:
            if not self.api_key:
                raise ImageGenerationError("OPENAI_API_KEY not set, image generation disabled")
            self._client = openai.OpenAI(api_key=self.api_key)
        return self._client

    def _generate_one(self, prompt: str) -> str:
        try:
            response = self.client.images.generate(
                model=self.model,
                prompt=prompt,
                n=1,
                size=self.size,
            )
        except openai.OpenAIError as e:
            raise ImageGenerationError(f"Image API error: {e}") from e

        url = response.data[0].url if response.data else None
        if not url:
            raise ImageGenerationError(f"Image API returned no URL for prompt: {prompt[:60]}")
        return url

    def generate(self, prompts: List[str]) -> List[str]:
        urls = [self._generate_one(prompt) for prompt in prompts]
        if urls:
            logger.info(f"[IMAGES] Generated {len(urls)} image(s) with {self.model}")
        return urls
