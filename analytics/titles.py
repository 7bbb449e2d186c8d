"""Title structure analysis and keyword extraction."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from analytics.records import VideoMetric

DIGIT_PATTERN = re.compile(r"\d")
COMPARISON_PATTERN = re.compile(r"\b(?:vs|versus)\b", re.IGNORECASE)
TOKEN_SPLIT_PATTERN = re.compile(r"[^a-z0-9]+")

EMOTIONAL_KEYWORDS = frozenset({
    "insane", "crazy", "craziest", "legendary", "worst", "best", "goat",
    "epic", "shocking", "unbelievable", "incredible", "ultimate", "biggest",
    "greatest", "wild", "brutal", "historic", "unreal", "disaster",
    "destroyed", "heartbreaking", "terrifying", "amazing", "massive",
})

STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "to", "of", "in", "on", "for",
    "with", "vs", "we", "our", "you", "your", "this", "that", "is", "are",
    "was", "were",
})


def tokenize(text: str) -> List[str]:
    return [token for token in TOKEN_SPLIT_PATTERN.split(text.lower()) if token]


def has_numbers(title: str) -> bool:
    return bool(DIGIT_PATTERN.search(title))


def has_question(title: str) -> bool:
    return "?" in title


def has_comparison(title: str) -> bool:
    return bool(COMPARISON_PATTERN.search(title))


def has_emotional_keyword(title: str) -> bool:
    return any(token in EMOTIONAL_KEYWORDS for token in tokenize(title))


@dataclass(frozen=True)
class TitleFeatures:
    has_numbers: bool
    has_question: bool
    has_comparison: bool
    has_emotional: bool
    char_length: int
    word_count: int


def analyze_title(title: str) -> TitleFeatures:
    title = title or ""
    return TitleFeatures(
        has_numbers=has_numbers(title),
        has_question=has_question(title),
        has_comparison=has_comparison(title),
        has_emotional=has_emotional_keyword(title),
        char_length=len(title),
        word_count=len(title.strip().split()),
    )


@dataclass(frozen=True)
class TitleMetrics:
    pct_with_numbers: float = 0.0
    pct_with_question: float = 0.0
    pct_with_comparison: float = 0.0
    pct_with_emotional: float = 0.0
    avg_char_length: float = 0.0
    avg_word_count: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pctWithNumbers": round(self.pct_with_numbers, 4),
            "pctWithQuestion": round(self.pct_with_question, 4),
            "pctWithComparison": round(self.pct_with_comparison, 4),
            "pctWithEmotional": round(self.pct_with_emotional, 4),
            "avgCharLength": round(self.avg_char_length, 1),
            "avgWordCount": round(self.avg_word_count, 1),
        }


def title_metrics(videos: Sequence[VideoMetric]) -> TitleMetrics:
    """Aggregate title features over a set of videos (one quartile)."""
    if not videos:
        return TitleMetrics()

    features = [analyze_title(video.title) for video in videos]
    return TitleMetrics(
        pct_with_numbers=float(np.mean([f.has_numbers for f in features])),
        pct_with_question=float(np.mean([f.has_question for f in features])),
        pct_with_comparison=float(np.mean([f.has_comparison for f in features])),
        pct_with_emotional=float(np.mean([f.has_emotional for f in features])),
        avg_char_length=float(np.mean([f.char_length for f in features])),
        avg_word_count=float(np.mean([f.word_count for f in features])),
    )


def extract_keywords(videos: Sequence[VideoMetric], limit: int = 10) -> List[Tuple[str, int]]:
    """Most frequent non-stopword title tokens; ties keep first-seen order."""
    frequency: Counter = Counter()
    for video in videos:
        words = [
            word for word in tokenize(video.title)
            if len(word) > 1 and word not in STOPWORDS
        ]
        frequency.update(words)
    return frequency.most_common(limit)
