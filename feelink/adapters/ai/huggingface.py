"""
Hugging Face classifier adapter
Hosted emotion model over the Inference API
"""

import asyncio
from typing import Any

import aiohttp

from ...core.exceptions import ExternalServiceError, ModelLoadingError
from ...domain.ports.classifier_port import IEmotionClassifier

SERVICE_NAME = "huggingface"


class HuggingFaceClassifier(IEmotionClassifier):
    """
    Hugging Face emotion classifier

    Posts the text to the Inference API with a bearer token. A 503
    whose body reports the model as loading raises ModelLoadingError so
    the gateway can apply its cold-start retry.
    """

    def __init__(
        self,
        api_token: str,
        model: str = "j-hartmann/emotion-english-distilroberta-base",
        timeout: float = 10.0,
        base_url: str = "https://api-inference.huggingface.co/models",
    ):
        self.api_token = api_token
        self.model = model
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/{self.model}"

    async def classify(self, text: str) -> list[tuple[str, float]]:
        """
        Classify text

        Args:
            text: input text

        Returns:
            list[tuple[str, float]]: label/score pairs

        Raises:
            ModelLoadingError: the model is cold-starting
            ExternalServiceError: any other API failure
        """
        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.api_url,
                    headers=headers,
                    json={"inputs": text},
                ) as response:
                    if response.status != 200:
                        await self._raise_for_error(response)
                    response_data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(
                f"Hugging Face request failed: {e!r}", service_name=SERVICE_NAME
            ) from e

        return self._parse_labels(response_data)

    async def _raise_for_error(self, response: aiohttp.ClientResponse) -> None:
        error_text = await response.text()
        try:
            body = await response.json(content_type=None)
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        error_message = str(body.get("error", error_text))
        if response.status == 503 and (
            "loading" in error_message.lower() or "estimated_time" in body
        ):
            raise ModelLoadingError(
                f"Hugging Face model loading: {error_message}",
                estimated_time=body.get("estimated_time"),
                service_name=SERVICE_NAME,
                status_code=response.status,
            )

        raise ExternalServiceError(
            f"Hugging Face API error: HTTP {response.status} - {error_message}",
            service_name=SERVICE_NAME,
            status_code=response.status,
        )

    @staticmethod
    def _parse_labels(response_data: Any) -> list[tuple[str, float]]:
        # Single-input calls come back either flat or wrapped in one more list
        if isinstance(response_data, list) and response_data and isinstance(response_data[0], list):
            response_data = response_data[0]

        if not isinstance(response_data, list):
            raise ExternalServiceError(
                "Invalid response structure from Hugging Face API",
                service_name=SERVICE_NAME,
            )

        pairs = []
        for item in response_data:
            if not isinstance(item, dict) or "label" not in item or "score" not in item:
                raise ExternalServiceError(
                    "Invalid label entry in Hugging Face response",
                    service_name=SERVICE_NAME,
                )
            pairs.append((str(item["label"]), float(item["score"])))
        return pairs

    @property
    def model_name(self) -> str:
        return self.model
