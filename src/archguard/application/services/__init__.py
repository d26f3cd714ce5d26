"""Application services.

Exports:
    - RuleEngine: Cached rule evaluation
    - EvaluationResult: Aggregated violations
    - PopulationLoader: Parallel, cached population building
"""

from archguard.application.services.population_loader import PopulationLoader
from archguard.application.services.rule_engine import EvaluationResult, RuleEngine

__all__ = [
    "EvaluationResult",
    "PopulationLoader",
    "RuleEngine",
]
