"""
Ensemble decision engine
Fuses keyword votes, sentiment and the optional remote classification
"""

from __future__ import annotations

from ..models.emotion import (
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    AnalysisMethod,
    EmotionCategory,
    EnsembleDecision,
    KeywordVoteTally,
    RemoteClassification,
    map_remote_label,
)

REMOTE_CONFIDENT_THRESHOLD = 0.7
REMOTE_CONFIDENT_BONUS = 0.1
REMOTE_CONFIDENT_CAP = 0.95

KEYWORD_MIN_VOTES = 2
KEYWORD_BASE_CONFIDENCE = 0.6
KEYWORD_PER_VOTE = 0.05
KEYWORD_BONUS_CAP = 0.3

SENTIMENT_BOUND = 5.0
SENTIMENT_HAPPY_AT = 0.7
SENTIMENT_SAD_AT = 0.3
SENTIMENT_CONFIDENCE = 0.7
NEUTRAL_CONFIDENCE = 0.5

OVERRIDE_CONFIDENCE = 0.65

AGREEMENT_BONUS = 0.15
AGREEMENT_CAP = 0.9


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def sentiment_probability(score: float) -> float:
    """Clamp a sentiment score into [-5, 5] and rescale to [0, 1]"""
    clamped = clamp(score, -SENTIMENT_BOUND, SENTIMENT_BOUND)
    return (clamped + SENTIMENT_BOUND) / (2 * SENTIMENT_BOUND)


def decide(
    votes: KeywordVoteTally,
    sentiment_score: float,
    remote: RemoteClassification | None = None,
) -> EnsembleDecision:
    """
    Decide the emotion for one request

    Pure function of its inputs. Tiers run in precedence order:
    1. a remote result above 0.7 confidence wins outright
    2. two or more keyword hits, else the sentiment probability
    3. anxious then angry overrides on keyword counts
    A non-confident remote result only raises confidence when it agrees.

    Args:
        votes: keyword tally
        sentiment_score: raw sentiment score (clamped here)
        remote: remote classification, if any

    Returns:
        EnsembleDecision: emotion, confidence in [0.45, 0.98], method, details
    """
    if remote is not None and remote.confidence > REMOTE_CONFIDENT_THRESHOLD:
        return EnsembleDecision(
            emotion=map_remote_label(remote.top_label),
            confidence=min(REMOTE_CONFIDENT_CAP, remote.confidence + REMOTE_CONFIDENT_BONUS),
            method=AnalysisMethod.HUGGINGFACE,
            details=remote.to_dict(),
        )

    sent_prob = sentiment_probability(sentiment_score)
    top_emotion, top_count = votes.ranked()[0]

    if top_count >= KEYWORD_MIN_VOTES:
        chosen = top_emotion
        confidence = KEYWORD_BASE_CONFIDENCE + min(KEYWORD_BONUS_CAP, top_count * KEYWORD_PER_VOTE)
    elif sent_prob >= SENTIMENT_HAPPY_AT:
        chosen, confidence = EmotionCategory.HAPPY, SENTIMENT_CONFIDENCE
    elif sent_prob <= SENTIMENT_SAD_AT:
        chosen, confidence = EmotionCategory.SAD, SENTIMENT_CONFIDENCE
    else:
        chosen, confidence = EmotionCategory.NEUTRAL, NEUTRAL_CONFIDENCE

    # Anxious first so that angry wins a tie against it
    for override in (EmotionCategory.ANXIOUS, EmotionCategory.ANGRY):
        if votes[override] > 0 and votes[override] >= votes[chosen]:
            chosen = override
            confidence = max(confidence, OVERRIDE_CONFIDENCE)

    confidence = clamp(confidence, MIN_CONFIDENCE, MAX_CONFIDENCE)

    details = {
        "sentimentScore": sentiment_score,
        "sentimentProbability": sent_prob,
        "keywordVotes": votes.to_dict(),
    }

    if remote is None:
        return EnsembleDecision(
            emotion=chosen,
            confidence=confidence,
            method=AnalysisMethod.ENSEMBLE_ONLY,
            details=details,
        )

    # The remote signal only corroborates; it never overturns the local choice
    if map_remote_label(remote.top_label) == chosen:
        confidence = min(AGREEMENT_CAP, confidence + AGREEMENT_BONUS)
    details.update(remote.to_dict())
    return EnsembleDecision(
        emotion=chosen,
        confidence=confidence,
        method=AnalysisMethod.ENSEMBLE_WITH_HF,
        details=details,
    )
