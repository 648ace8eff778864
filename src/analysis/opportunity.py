"""Opportunity selector: the single best-scoring symbol in a universe."""

from pathlib import Path
from typing import Iterable

from src.analysis.decision import DecisionEngine, TrendResult
from src.market.provider_chain import ProviderChain
from src.market.symbols import SYMBOL_UNIVERSE
from src.shared.utils import setup_logger


def pick_best(results: Iterable[TrendResult]) -> TrendResult | None:
    """Result with the highest confidence; the earliest one wins ties."""
    best: TrendResult | None = None
    for result in results:
        if best is None or result.confidence > best.confidence:
            best = result
    return best


class OpportunitySelector:
    """Scans symbols in order and keeps the strongest directional result."""

    def __init__(
        self,
        chain: ProviderChain,
        decision_engine: DecisionEngine,
        universe: Iterable[str] = SYMBOL_UNIVERSE,
        log_file: Path | None = None,
    ) -> None:
        self.chain = chain
        self.decision_engine = decision_engine
        self.universe = tuple(universe)
        self.logger = setup_logger(self.__class__.__name__, log_file)

    def scan(self, universe: Iterable[str] | None = None) -> list[TrendResult]:
        """Decide every symbol that has market data, in universe order."""
        results: list[TrendResult] = []
        for symbol in self.universe if universe is None else universe:
            candles = self.chain.fetch_candles(symbol)
            if candles is None:
                self.logger.warning("Skipping %s: no market data", symbol)
                continue
            results.append(self.decision_engine.decide(symbol, candles))
        return results

    def best_opportunity(self, universe: Iterable[str] | None = None) -> TrendResult | None:
        """Best result across the universe, or None if no symbol had data."""
        results = self.scan(universe)
        best = pick_best(results)
        if best is None:
            self.logger.warning("No opportunities found")
        else:
            self.logger.info(
                "Best opportunity: %s %s (%.1f%%) out of %d symbols",
                best.symbol,
                best.direction,
                best.confidence * 100,
                len(results),
            )
        return best
