"""Domain ports (interfaces/protocols)."""

from archguard.domain.ports.entity_parser import EntityParserPort
from archguard.domain.ports.rule import ResultCachePort, RuleProtocol

__all__ = [
    "EntityParserPort",
    "ResultCachePort",
    "RuleProtocol",
]
