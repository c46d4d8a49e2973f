"""
Bots module - Automated play.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy: Uniform random baseline
- HeuristicPolicy: Greedy scoring of legal actions
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, HeuristicPolicy

POLICIES = {
    "random": RandomPolicy,
    "heuristic": HeuristicPolicy,
}

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "HeuristicPolicy",
    "POLICIES",
]
