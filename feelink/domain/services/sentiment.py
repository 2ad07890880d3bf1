"""
Sentiment scoring
Thin wrapper over TextBlob polarity
"""

from textblob import TextBlob

# TextBlob polarity lives in [-1, 1]; the engine expects the nominal [-5, 5] scale
POLARITY_SCALE = 5.0


class SentimentScorer:
    """General-purpose sentiment scorer"""

    def __init__(self, scale: float = POLARITY_SCALE):
        self._scale = scale

    def score(self, text: str) -> float:
        """
        Signed sentiment score, not clamped

        Args:
            text: input text

        Returns:
            float: polarity scaled to roughly [-5, 5]
        """
        polarity = TextBlob(text).sentiment.polarity
        return float(polarity) * self._scale
