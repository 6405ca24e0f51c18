"""Contract Agent - drafts a smart-contract skeleton for an idea."""

from typing import Optional

from contracts import Idea, ProviderSettings
from providers import LLMProvider
from .base_agent import BaseAgent


CONTRACT_SYSTEM_PROMPT = "Respond with code only."


class ContractAgent(BaseAgent):
    """Returns the reply verbatim; code is plain text, not JSON."""

    role = "generateContractCode"
    temperature = 0.2
    max_tokens = 400

    def get_task_description(self) -> str:
        return "Write a Solidity contract skeleton for an idea"

    def build_prompt(self, idea: Idea) -> str:
        return (
            f"Write a Solidity smart contract skeleton for {idea.title}. "
            f"Use {idea.ecosystem} context. Return only the code block."
        )

    def run(self, idea: Idea) -> str:
        return self._complete(CONTRACT_SYSTEM_PROMPT, self.build_prompt(idea))


def generate_contract_code(
    idea: Idea,
    provider_override: Optional[ProviderSettings] = None,
    provider: Optional[LLMProvider] = None,
) -> str:
    """Draft contract code for `idea`."""
    return ContractAgent(provider=provider, provider_override=provider_override).run(idea)
