"""Agent implementations for Idea Forge.

Each agent maps one user intent to a provider prompt and a typed result.
"""

from .base_agent import BaseAgent, to_display_string
from .response_recovery import recover
from .generator_agent import GeneratorAgent, generate_ideas
from .verifier_agent import VerifierAgent, verify_idea
from .blueprint_agent import BlueprintAgent, generate_blueprint
from .translator_agent import TranslatorAgent, translate_idea, TRANSLATED_FIELDS
from .contract_agent import ContractAgent, generate_contract_code

__all__ = [
    # Base
    "BaseAgent",
    "to_display_string",
    "recover",
    # Specialized agents
    "GeneratorAgent",
    "generate_ideas",
    "VerifierAgent",
    "verify_idea",
    "BlueprintAgent",
    "generate_blueprint",
    "TranslatorAgent",
    "translate_idea",
    "TRANSLATED_FIELDS",
    "ContractAgent",
    "generate_contract_code",
]
