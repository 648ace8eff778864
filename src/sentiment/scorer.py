"""Text polarity scoring.

The sentiment engine only needs a "comparative" score per text: the summed
valence of every recognized word divided by the number of words. Any object
with a matching comparative() method can be plugged in; LexiconScorer is the
built-in implementation on top of the AFINN-165 word list (integer valences
in [-5, 5]) from the `afinn` package, with single-word negation and a small
set of crypto community terms AFINN does not know.
"""

import re
from typing import Mapping, Protocol

from afinn import Afinn

# Crypto vocabulary missing from (or scored differently than in) AFINN-165
CRYPTO_TERMS: dict[str, int] = {
    "moon": 3, "mooning": 3, "bullish": 3, "bull": 2, "pump": 2, "pumping": 2,
    "rally": 2, "breakout": 2, "hodl": 1, "adoption": 2, "undervalued": 1,
    "ath": 2, "wagmi": 2, "lambo": 2,
    "bearish": -3, "bear": -2, "dump": -2, "dumping": -2, "selloff": -2,
    "rekt": -3, "rug": -3, "rugpull": -3, "scam": -3, "scammed": -3, "fud": -2,
    "hacked": -3, "exploit": -2, "insolvent": -3, "bankrupt": -3, "ngmi": -2,
    "overvalued": -1, "liquidated": -2, "crash": -2, "crashing": -2,
}

NEGATORS = frozenset(
    {
        "not", "no", "never", "none", "nobody", "nothing", "neither", "nor",
        "dont", "don't", "doesnt", "doesn't", "isnt", "isn't", "arent", "aren't",
        "wasnt", "wasn't", "wont", "won't", "cant", "can't", "cannot", "without",
    }
)

_NON_WORD = re.compile(r"[^\w\s']+")


class PolarityScorer(Protocol):
    """Anything that can score a text's polarity normalized by length."""

    def comparative(self, text: str) -> float:
        ...


def tokenize(text: str) -> list[str]:
    """Lower-case words with punctuation stripped (apostrophes kept)."""
    return _NON_WORD.sub(" ", text.lower()).split()


class LexiconScorer:
    """AFINN word-valence scorer with single-word negation."""

    def __init__(
        self,
        extra_terms: Mapping[str, int] | None = None,
        negators: frozenset[str] = NEGATORS,
        afinn: Afinn | None = None,
    ) -> None:
        """Initialize the scorer.

        Args:
            extra_terms: Valences that take precedence over AFINN
                (defaults to CRYPTO_TERMS).
            negators: Words that flip the valence of the word after them.
            afinn: AFINN instance to look words up in (English word list if omitted).
        """
        self.extra_terms = dict(CRYPTO_TERMS if extra_terms is None else extra_terms)
        self.negators = negators
        self._afinn = afinn or Afinn(language="en")

    def valence(self, word: str) -> float:
        if word in self.extra_terms:
            return float(self.extra_terms[word])
        return float(self._afinn.score(word))

    def score(self, text: str) -> float:
        """Sum of word valences; a word directly after a negator is flipped."""
        total = 0.0
        previous = ""
        for token in tokenize(text):
            valence = self.valence(token)
            if valence and previous in self.negators:
                valence = -valence
            total += valence
            previous = token
        return total

    def comparative(self, text: str) -> float:
        tokens = tokenize(text)
        if not tokens:
            return 0.0
        return self.score(text) / len(tokens)
