"""Sentence segmentation for narration, search and click targets."""

from .sentence_segmenter import clean_utterance, split_sentences

__all__ = [
    "split_sentences",
    "clean_utterance",
]
