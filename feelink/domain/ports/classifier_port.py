"""
Remote classifier port
Abstracts the hosted multi-class emotion model
"""

from abc import ABC, abstractmethod


class IEmotionClassifier(ABC):
    """
    Remote emotion classifier interface

    Implementations return raw label/score pairs and raise
    ModelLoadingError while the model is cold-starting, or
    ExternalServiceError for any other failure.
    """

    @abstractmethod
    async def classify(self, text: str) -> list[tuple[str, float]]:
        """
        Classify text

        Args:
            text: input text

        Returns:
            list[tuple[str, float]]: label/score pairs in any order
        """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Hosted model id"""
